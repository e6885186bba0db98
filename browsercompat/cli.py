"""Console script for browsercompat."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console

from ._version import __version__
from .constants import DEFAULT_TIMEOUT_SECONDS
from .dataset import load_dataset, lookup_path
from .exceptions import BrowserCompatError
from .http import use_shared_client
from .model import DESKTOP_CATALOG, MOBILE_CATALOG
from .parse_compat import parse_view
from .render_html import no_data_message, render_view
from .render_terminal import render_terminal
from .strings import default_strings, load_strings
from .util.html import debug_enabled, fragment_text


def _configure_logging() -> None:
    if debug_enabled():
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("query", metavar="<feature.path>")
@click.option(
    "-d",
    "--data",
    "data_source",
    required=True,
    metavar="PATH_OR_URL",
    help="Compat dataset as a local JSON file or an http(s) URL.",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["html", "text"]),
    default="html",
    show_default=True,
    help="Emit an HTML fragment or a terminal table.",
)
@click.option(
    "-c",
    "--catalog",
    type=click.Choice(["desktop", "mobile"]),
    default="desktop",
    show_default=True,
    help="Tab selected by default (html) or catalog shown (text).",
)
@click.option(
    "-s",
    "--strings",
    "strings_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file overriding localized strings.",
)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT_SECONDS,
    show_default=True,
    help="Timeout in seconds for remote datasets.",
)
@click.version_option(__version__, "-v", "--version")
def main(
    query: str,
    data_source: str,
    output_format: str,
    catalog: str,
    strings_path: str | None,
    timeout: float,
) -> None:
    """
    Render browser compatibility tables for a feature path

    \b
    Example usages:
      browsercompat css.properties.background-attachment -d data.json
      browsercompat api.Fetch -d data.json -f text -c mobile
    """
    _configure_logging()
    try:
        strings = load_strings(strings_path) if strings_path else default_strings
        with use_shared_client(timeout=timeout):
            data = load_dataset(data_source)
    except BrowserCompatError as exc:
        raise click.ClickException(str(exc)) from exc

    view = parse_view(lookup_path(data, query), query)
    default_catalog = "mobile" if catalog == "mobile" else "desktop"

    if output_format == "html":
        if view is None:
            click.echo(no_data_message(query, strings))
            return
        click.echo(render_view(view, strings, default_catalog))
        return

    if view is None:
        click.echo(fragment_text(no_data_message(query, strings)))
        return
    selected = MOBILE_CATALOG if catalog == "mobile" else DESKTOP_CATALOG
    Console().print(render_terminal(view, selected, strings))
