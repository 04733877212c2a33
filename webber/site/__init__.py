"""Page assembly and minification."""

from .assemble import MissingSnippetError, TagGroup, assemble_page, group_by_tag
from .minify import MinifyOptions, minify

__all__ = [
    "assemble_page",
    "group_by_tag",
    "MissingSnippetError",
    "TagGroup",
    "minify",
    "MinifyOptions",
]
