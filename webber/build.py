"""Build pipeline: load the page sources, assemble, minify and write."""

from __future__ import annotations

import time
from pathlib import Path

from pydantic import BaseModel

from .config import BuildConfig
from .site.assemble import assemble_page, group_by_tag
from .site.minify import minify


class BuildError(Exception):
    """A fatal failure in one named stage of the build."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"During {stage}: {cause}")
        self.stage = stage
        self.cause = cause


class Templates(BaseModel):
    """Static HTML fragments placed before and after the generated markup."""

    model_config = {"frozen": True}

    start: str
    end: str


class SiteSources(BaseModel):
    """Everything the page is assembled from."""

    snippets: dict[str, str]
    templates: Templates
    tag_db: dict[str, str | None]


class BuildResult(BaseModel):
    """Result of building the page."""

    output_path: Path
    groups: int
    snippets_rendered: int
    total_bytes: int
    elapsed_seconds: float


def load_snippets(snippets_dir: Path) -> dict[str, str]:
    """Read every snippet file, keyed by filename, in case-insensitive order."""
    try:
        filenames = sorted((p.name for p in snippets_dir.iterdir()), key=str.lower)
        return {
            name: (snippets_dir / name).read_text(encoding="utf-8") for name in filenames
        }
    except (OSError, UnicodeDecodeError) as e:
        raise BuildError("snippet loading", e) from e


def load_templates(config: BuildConfig) -> Templates:
    try:
        return Templates(
            start=config.index_start.read_text(encoding="utf-8"),
            end=config.index_end.read_text(encoding="utf-8"),
        )
    except (OSError, UnicodeDecodeError) as e:
        raise BuildError("static part loading", e) from e


def parse_tag_database(text: str) -> dict[str, str | None]:
    """Parse `name:tag` lines into a mapping of snippet name to tag.

    Only the first two colon-separated fields count. A line without a colon
    maps to None, which leaves that snippet out of every group. Later lines
    win over earlier ones for the same name.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines = lines[:-1]

    tag_db: dict[str, str | None] = {}
    for line in lines:
        fields = line.rstrip("\r").split(":")
        tag_db[fields[0]] = fields[1] if len(fields) > 1 else None
    return tag_db


def load_tag_database(path: Path) -> dict[str, str | None]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BuildError("tag database loading", e) from e
    return parse_tag_database(text)


def load_sources(config: BuildConfig) -> SiteSources:
    return SiteSources(
        snippets=load_snippets(config.snippets_dir),
        templates=load_templates(config),
        tag_db=load_tag_database(config.tag_database),
    )


def render_page(sources: SiteSources) -> str:
    """Assemble the page and minify it."""
    return minify(
        assemble_page(
            snippets=sources.snippets,
            start=sources.templates.start,
            end=sources.templates.end,
            tag_db=sources.tag_db,
        )
    )


def build_site(config: BuildConfig) -> BuildResult:
    """Build the index page described by `config`.

    Raises:
        BuildError: naming the stage that failed
    """
    started = time.perf_counter()
    sources = load_sources(config)

    try:
        html = render_page(sources)
        config.output_html.parent.mkdir(parents=True, exist_ok=True)
        config.output_html.write_text(html, encoding="utf-8")
    except Exception as e:
        raise BuildError(f"{config.output_html.name} generation", e) from e

    groups = group_by_tag(sources.tag_db)
    return BuildResult(
        output_path=config.output_html,
        groups=len(groups),
        snippets_rendered=sum(len(g.names) for g in groups),
        total_bytes=len(html.encode("utf-8")),
        elapsed_seconds=time.perf_counter() - started,
    )
