"""Configuration constants and paths for webber."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

# Inputs, relative to the directory the build runs in
SNIPPETS_DIR = Path("snippets")
STATIC_PARTS_DIR = Path("static-parts")
TAG_DATABASE = Path("tag_database")

# Static fragments wrapped around the generated markup
INDEX_START = "index-start.html"
INDEX_END = "index-end.html"

# Outputs
DOCS_DIR = Path("docs")
STYLE_SOURCE = DOCS_DIR / "mini" / "flavor.scss"
STYLE_OUTPUT = DOCS_DIR / "mini.css"
OUTPUT_HTML = DOCS_DIR / "index.html"

# Snippet files are named after the snippet they document
SNIPPET_EXTENSION = ".md"

# Python-Markdown extensions used for every render
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]

# Label printed with the elapsed time of a run
TIMER_LABEL = "Builder"


class BuildConfig(BaseModel):
    """Every path a build reads from or writes to."""

    model_config = {"frozen": True}

    snippets_dir: Path = SNIPPETS_DIR
    static_parts_dir: Path = STATIC_PARTS_DIR
    tag_database: Path = TAG_DATABASE
    style_source: Path = STYLE_SOURCE
    style_output: Path = STYLE_OUTPUT
    output_html: Path = OUTPUT_HTML

    @property
    def index_start(self) -> Path:
        return self.static_parts_dir / INDEX_START

    @property
    def index_end(self) -> Path:
        return self.static_parts_dir / INDEX_END

    @classmethod
    def for_root(cls, root: Path) -> BuildConfig:
        """Resolve the default layout against `root` instead of the working directory."""
        return cls(
            snippets_dir=root / SNIPPETS_DIR,
            static_parts_dir=root / STATIC_PARTS_DIR,
            tag_database=root / TAG_DATABASE,
            style_source=root / STYLE_SOURCE,
            style_output=root / STYLE_OUTPUT,
            output_html=root / OUTPUT_HTML,
        )
