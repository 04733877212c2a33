"""Stylesheet compilation, run alongside the page build."""

from __future__ import annotations

from concurrent.futures import Executor, Future
from pathlib import Path

import sass
from pydantic import BaseModel

from . import console
from .config import BuildConfig


class StyleResult(BaseModel):
    """Outcome of one stylesheet compilation."""

    output_path: Path
    ok: bool
    error: str | None = None


def compile_styles(source: Path, output: Path) -> StyleResult:
    """Compile `source` to compressed CSS and write it to `output`.

    Failures are logged and reported in the result, never raised, so a broken
    stylesheet cannot take the page build down with it.
    """
    try:
        css = sass.compile(filename=str(source), output_style="compressed")
    except (sass.CompileError, OSError) as e:
        # libsass raises IOError itself when the source file is missing
        console.error(f"During {output.name} file generation: {e}")
        return StyleResult(output_path=output, ok=False, error=str(e))

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(css, encoding="utf-8")
    except OSError as e:
        console.error(f"During {output.name} file writing: {e}")
        return StyleResult(output_path=output, ok=False, error=str(e))

    console.success(f"{output.name} file generated!")
    return StyleResult(output_path=output, ok=True)


def start_style_compilation(config: BuildConfig, executor: Executor) -> Future[StyleResult]:
    """Submit the stylesheet build to `executor` and return without waiting.

    Nothing in the page pipeline depends on the returned future; it completes
    on its own schedule, before or after the HTML is written.
    """
    return executor.submit(compile_styles, config.style_source, config.style_output)
