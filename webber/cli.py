"""CLI entry point for webber.

Builds the page from the working directory; the only flag is `--version`.
"""

from __future__ import annotations

import argparse
from concurrent.futures import ThreadPoolExecutor

from . import __version__, console
from .build import BuildError, build_site
from .config import TIMER_LABEL, BuildConfig
from .styles import start_style_compilation


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="webber",
        description="Build docs/index.html from snippets, the tag database and static parts.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"webber {__version__}",
    )
    parser.parse_args(argv)

    return run(BuildConfig())


def run(config: BuildConfig) -> int:
    """Compile styles in the background and build the page.

    The exit code reflects the page build only; stylesheet failures are
    reported by the style task itself.
    """
    with console.timer(TIMER_LABEL), ThreadPoolExecutor(max_workers=1) as styles:
        start_style_compilation(config, styles)
        try:
            result = build_site(config)
        except BuildError as e:
            console.error(str(e))
            return 1
        console.success(f"{result.output_path.name} file generated!")
        return 0


if __name__ == "__main__":
    app()
