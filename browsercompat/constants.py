"""Constants used across pybrowsercompat."""

from __future__ import annotations

from typing import Final

DESKTOP_BROWSERS: Final[tuple[tuple[str, str], ...]] = (
    ("chrome", "Chrome"),
    ("edge", "Edge"),
    ("firefox", "Firefox"),
    ("ie", "Internet Explorer"),
    ("opera", "Opera"),
    ("safari", "Safari"),
)

MOBILE_BROWSERS: Final[tuple[tuple[str, str], ...]] = (
    ("webview_android", "Android webview"),
    ("chrome_android", "Chrome for Android"),
    ("edge_mobile", "Edge mobile"),
    ("firefox_android", "Firefox for Android"),
    ("ie_mobile", "IE mobile"),
    ("opera_android", "Opera Android"),
    ("safari_ios", "Safari iOS"),
)

COMPAT_KEY: Final[str] = "__compat"
BASIC_SUPPORT_KEY: Final[str] = "basic_support"
NOTE_ANCHOR_PREFIX: Final[str] = "compatNote_"

DEFAULT_STRINGS: Final[dict[str, str]] = {
    "feature": "Feature",
    "feature_basicsupport": "Basic support",
    "supportsShort_yes": "(Yes)",
    "supportsShort_no": "No",
    "supportsShort_unknown": "?",
    "supportsShort_unknown_title": "Compatibility unknown; please update this.",
    "supportsShort_yes_title": "Please update this with the earliest version of support.",
    "browserType_desktop": "Desktop",
    "browserType_mobile": "Mobile",
    "prefix_title": "prefix",
    "compat_notes": "Notes",
    "compat_nodata": (
        'No compatibility data found. Please contribute data for "{query}" to the '
        '<a href="https://github.com/mdn/browser-compat-data">'
        "MDN compatibility data repository</a>."
    ),
}

FLAG_PREFERENCE_INSTRUCTIONS: Final[dict[str, str]] = {
    "firefox": "To change preferences in Firefox, visit about:config.",
    "chrome": "To change preferences in Chrome, visit chrome://flags.",
}

TERMINAL_STATUS_LABELS: Final[dict[str, str]] = {
    "yes": "Yes",
    "no": "No",
    "unknown": "?",
}

DEBUG_ENV_VAR: Final[str] = "BROWSERCOMPAT_DEBUG"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
