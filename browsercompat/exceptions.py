"""Exception types for pybrowsercompat."""

from __future__ import annotations


class BrowserCompatError(Exception):
    """Base exception for expected application errors."""


class NetworkError(BrowserCompatError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to connect to {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(BrowserCompatError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(BrowserCompatError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(BrowserCompatError):
    """Raised when a response body is empty or not a JSON object."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty or invalid JSON content from {url}")


class DataFileError(BrowserCompatError):
    """Raised when a local JSON file cannot be read or decoded."""

    def __init__(self, path: str, *, cause: str | None = None) -> None:
        self.path = path
        detail = f"Unable to read JSON data from {path}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)
