"""Cyclopts CLI entrypoint for generating llms.txt indexes.

The ``llms-index`` console script reads an ``llms-index.yaml`` configuration
and the route catalogue exported by the site generator, then writes
``llms.txt`` (and optionally ``llms-full.txt``), the route cache, and the
copy-button data into the build output directory. ``check-cache`` reports
whether the current configuration would change the routes recorded by a
previous build.

Examples
--------
Generate the index for a built site:

>>> from llms_index.cli import app
>>> app.run(
...     ["generate", "--routes", "build/routes.json", "--out-dir", "build"]
... )  # doctest: +SKIP

Check a previous build's cache against the current configuration:

>>> app.run(
...     ["check-cache", "--cache", "build/.llms-index-cache.json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CACHE_FILENAME
from .cache import decode_cache, would_filtering_change_cached_routes
from .catalogue import load_catalogue
from .config import PluginOptions, load_plugin_options
from .generation import LlmsIndexBuilder
from .models import SiteInfo

DEFAULT_CONFIG = Path("llms-index.yaml")
DEFAULT_OUT_DIR = Path("build")

LOG_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}

app = App(name="llms-index", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def configure_logging(log_level: int) -> None:
    """Configure the ``llms_index`` logger for a ``log_level`` of 0 to 3.

    Levels map to ERROR, WARNING, INFO and DEBUG; values outside the range
    are clamped.
    """
    level = LOG_LEVELS[min(max(log_level, 0), 3)]
    logging.basicConfig(format="[llms-index] %(levelname)s %(message)s")
    logging.getLogger("llms_index").setLevel(level)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_options(config: Path) -> PluginOptions:
    """Return options from ``config``, or defaults when the file is absent."""
    if not config.exists():
        return PluginOptions()
    return load_plugin_options(config)


@app.command(help="Generate llms.txt and companion files from a route catalogue.")
def generate(
    *,
    routes: typ.Annotated[
        Path, Parameter(help="Path to the route catalogue JSON", env_var="INPUT_ROUTES")
    ],
    config: typ.Annotated[
        Path, Parameter(help="Path to llms-index config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    out_dir: typ.Annotated[
        Path, Parameter(help="Build output directory", env_var="INPUT_OUT_DIR")
    ] = DEFAULT_OUT_DIR,
    site_dir: typ.Annotated[
        Path | None,
        Parameter(
            help="Directory attachment sources are relative to",
            env_var="INPUT_SITE_DIR",
        ),
    ] = None,
    site_url: typ.Annotated[
        str, Parameter(help="Public site URL", env_var="INPUT_SITE_URL")
    ] = "",
    base_url: typ.Annotated[
        str, Parameter(help="Site base URL", env_var="INPUT_BASE_URL")
    ] = "/",
    site_title: typ.Annotated[
        str | None, Parameter(help="Site title", env_var="INPUT_SITE_TITLE")
    ] = None,
) -> None:
    """Generate the llms.txt artifacts for one site build.

    Parameters
    ----------
    routes : Path
        Route catalogue exported by the site generator (``INPUT_ROUTES``).
    config : Path, optional
        Path to ``llms-index.yaml``; defaults apply when the file is absent.
    out_dir : Path, optional
        Directory receiving every generated file.
    site_dir : Path or None, optional
        Base directory for attachment sources; defaults to the directory
        containing ``config``.
    site_url : str, optional
        Public site URL used for absolute links.
    base_url : str, optional
        Base URL the site is served under.
    site_title : str or None, optional
        Site title used when the configuration sets none.

    Returns
    -------
    None
        Writes artifacts and prints the generated paths.

    Raises
    ------
    LlmsConfigError
        If the configuration or route catalogue is invalid.
    LlmsProcessingError
        If route or section issues were collected with severity ``throw``.
    """
    options = _load_options(config)
    configure_logging(options.log_level)
    builder = LlmsIndexBuilder(
        options,
        load_catalogue(routes),
        site=SiteInfo(url=site_url, base_url=base_url, title=site_title),
        site_dir=site_dir or config.parent,
        out_dir=out_dir,
    )
    for path in builder.run():
        print(f"wrote {_format_path(path)}")


@app.command(
    name="check-cache",
    help="Report whether the configuration would change cached routes.",
)
def check_cache(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to llms-index config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    cache: typ.Annotated[
        Path, Parameter(help="Path to the route cache", env_var="INPUT_CACHE")
    ] = DEFAULT_OUT_DIR / CACHE_FILENAME,
) -> None:
    """Compare a previous build's route cache with the current configuration.

    Prints the cached and filtered route counts and, when they differ, the
    reason. The command never rewrites the cache.
    """
    options = _load_options(config)
    configure_logging(options.log_level)
    cached = decode_cache(cache.read_bytes())
    report = would_filtering_change_cached_routes(cached.routes, options)
    print(f"cached routes: {report.current_count}")
    print(f"routes after filtering: {report.filtered_count}")
    if report.would_change:
        print(report.change_reason)
    else:
        print("No change")


def main() -> None:
    """Invoke the Cyclopts application behind the ``llms-index`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
