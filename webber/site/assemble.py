"""Page assembly: tag groups, table of contents and snippet cards."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import markdown

from ..config import MARKDOWN_EXTENSIONS, SNIPPET_EXTENSION
from .templates import (
    CONTENT_AREA_OPEN,
    TOP_ANCHOR,
    group_heading,
    snippet_card,
    toc_heading,
    toc_link,
)

UNCATEGORIZED = "uncategorized"


class MissingSnippetError(KeyError):
    """The tag database names a snippet that has no file."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"tag database entry {self.name!r} has no {self.name}{SNIPPET_EXTENSION} snippet"


@dataclass(frozen=True)
class TagGroup:
    tag: str
    names: tuple[str, ...]

    @property
    def uncategorized(self) -> bool:
        return self.tag.lower() == UNCATEGORIZED

    @property
    def title(self) -> str:
        return capitalize(self.tag)


def capitalize(text: str, lower_rest: bool = False) -> str:
    rest = text[1:].lower() if lower_rest else text[1:]
    return text[:1].upper() + rest


# ASCII punctuation and symbols in ICU root collation order; all sort before digits and letters
_PUNCTUATION_ORDER = " _-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_PUNCTUATION_WEIGHTS = {c: chr(1 + i) for i, c in enumerate(_PUNCTUATION_ORDER)}


def locale_key(text: str) -> tuple[str, str, str]:
    """Sort key approximating `localeCompare` (ICU root collation) for ASCII text.

    Compares case-insensitively with punctuation ahead of digits and letters,
    then breaks ties lowercase first.
    """
    primary = "".join(_PUNCTUATION_WEIGHTS.get(c, c) for c in text.casefold())
    return (primary, text.swapcase(), text)


def new_markdown() -> markdown.Markdown:
    return markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)


def group_by_tag(tag_db: Mapping[str, str | None]) -> list[TagGroup]:
    """Group snippet names by tag.

    Tags are sorted with `locale_key`; empty tags are dropped and the
    uncategorized group always comes last. Names inside a group keep the
    order of the tag database.
    """
    tags = sorted({tag for tag in tag_db.values() if tag}, key=locale_key)
    groups = [
        TagGroup(tag=tag, names=tuple(name for name, t in tag_db.items() if t == tag))
        for tag in tags
    ]
    return [g for g in groups if not g.uncategorized] + [g for g in groups if g.uncategorized]


def render_toc(groups: Iterable[TagGroup], md: markdown.Markdown) -> str:
    parts: list[str] = []
    for group in groups:
        parts.append(toc_heading(md.reset().convert(group.title)))
        for name in group.names:
            parts.append(toc_link(md.reset().convert(f"[{name}](#{name.lower()})")))
        parts.append("\n")
    return "".join(parts)


def render_content(
    groups: Iterable[TagGroup],
    snippets: Mapping[str, str],
    md: markdown.Markdown,
) -> str:
    parts: list[str] = []
    for group in groups:
        parts.append(group_heading(md.reset().convert(f"## {group.title}")))
        for name in group.names:
            source = snippets.get(name + SNIPPET_EXTENSION)
            if source is None:
                raise MissingSnippetError(name)
            parts.append(snippet_card(md.reset().convert(source), anchor=name.lower()))
    return "".join(parts)


def assemble_page(
    snippets: Mapping[str, str],
    start: str,
    end: str,
    tag_db: Mapping[str, str | None],
) -> str:
    """Build the unminified page: navigation, content area, then every card."""
    groups = group_by_tag(tag_db)
    md = new_markdown()
    return "".join(
        [
            start + "\n",
            render_toc(groups, md),
            CONTENT_AREA_OPEN,
            TOP_ANCHOR,
            render_content(groups, snippets, md),
            "\n" + end + "\n",
        ]
    )
