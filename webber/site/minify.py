"""HTML minification.

Streams the page through the standard library's HTMLParser and re-emits it
with html-minifier style options applied. Tags and attributes are rebuilt from
the raw start tag text, so entities inside attribute values survive untouched.
Embedded CSS is compressed with libsass and embedded JavaScript with rjsmin.
"""

from __future__ import annotations

import re
from html import escape
from html.parser import HTMLParser

import rjsmin
import sass
from pydantic import BaseModel

from .. import console

BOOLEAN_ATTRIBUTES = {
    "allowfullscreen",
    "async",
    "autofocus",
    "autoplay",
    "checked",
    "compact",
    "controls",
    "declare",
    "default",
    "defaultchecked",
    "defaultmuted",
    "defaultselected",
    "defer",
    "disabled",
    "enabled",
    "formnovalidate",
    "hidden",
    "indeterminate",
    "inert",
    "ismap",
    "itemscope",
    "loop",
    "multiple",
    "muted",
    "nohref",
    "noresize",
    "noshade",
    "novalidate",
    "nowrap",
    "open",
    "pauseonexit",
    "readonly",
    "required",
    "reversed",
    "scoped",
    "seamless",
    "selected",
    "sortable",
    "truespeed",
    "typemustmatch",
    "visible",
}

# End tags HTML lets a document leave out
OPTIONAL_END_TAGS = {
    "body",
    "colgroup",
    "dd",
    "dt",
    "head",
    "html",
    "li",
    "optgroup",
    "option",
    "p",
    "rp",
    "rt",
    "tbody",
    "td",
    "tfoot",
    "th",
    "thead",
    "tr",
}

# Attributes dropped when empty and remove_empty_attributes is set
EMPTY_REMOVABLE_ATTRIBUTES = {"class", "dir", "id", "lang", "style", "title"}

RAW_TEXT_TAGS = {"script", "style"}
PRESERVE_WHITESPACE_TAGS = {"pre", "textarea"}

JS_TYPES = {
    "",
    "application/ecmascript",
    "application/javascript",
    "module",
    "text/ecmascript",
    "text/javascript",
}

_CUSTOM_FRAGMENT = re.compile(r"\s*(<%[\s\S]*?%>|<\?[\s\S]*?\?>)\s*")
_TAG_NAME = re.compile(r"[^\s/>]+")
_ATTRIBUTE = re.compile(r"""([^\s"'<>/=]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s>]+))?""")
_UNQUOTED_SAFE = re.compile(r"^[^\s\"'=<>`]+$")
_CLOSING_SLASH = re.compile(r"""(?:^[^\s/>]+|[\s"'])/$""")
_CSS_URLS_AND_STRINGS = re.compile(r"""url\([^)]*\)|"[^"]*"|'[^']*'""")
_CONDITIONAL_COMMENT = re.compile(r"^(\[if[^\]]*\]>)([\s\S]*)(<!\[endif\])$")
_WHITESPACE = re.compile(r"\s+")


class MinifyOptions(BaseModel):
    """Minifier switches, named after their html-minifier counterparts.

    The defaults are the settings the page build uses.
    """

    model_config = {"frozen": True}

    collapse_boolean_attributes: bool = True
    collapse_whitespace: bool = False
    decode_entities: bool = False
    minify_css: bool = True
    minify_js: bool = True
    keep_closing_slash: bool = True
    process_conditional_comments: bool = True
    remove_attribute_quotes: bool = False
    remove_comments: bool = True
    remove_empty_attributes: bool = False
    remove_optional_tags: bool = False
    remove_script_type_attributes: bool = False
    remove_style_link_type_attributes: bool = False
    trim_custom_fragments: bool = True


def minify(html: str, options: MinifyOptions | None = None) -> str:
    """Minify an HTML document or fragment."""
    options = options or MinifyOptions()
    if options.trim_custom_fragments:
        html = _CUSTOM_FRAGMENT.sub(r"\1", html)

    parser = _MinifyingHTMLParser(options)
    parser.feed_document(html)
    parser.close()
    parser.finish()
    return "".join(parser.out)


def minify_css(css: str) -> str:
    """Compress a stylesheet; on a parse error, warn and return it unchanged.

    libsass reads its input as SCSS, where `//` opens a line comment. Plain CSS
    has no such comment, so a stylesheet with `//` outside `url()` or a string
    is left alone rather than losing the rules that follow it.
    """
    if not css.strip():
        return css
    if "//" in _CSS_URLS_AND_STRINGS.sub("", css):
        console.warning("Left stylesheet unminified: it contains `//`")
        return css
    try:
        return sass.compile(string=css, output_style="compressed").strip()
    except sass.CompileError as e:
        console.warning(f"Left stylesheet unminified: {e}")
        return css


def minify_style_attribute(declarations: str) -> str:
    if not declarations.strip():
        return declarations
    # libsass wants a rule, not a bare declaration list
    compiled = minify_css(f"x{{{declarations}}}")
    if compiled.startswith("x{") and compiled.endswith("}"):
        return compiled[2:-1]
    return declarations


def minify_js(js: str) -> str:
    if not js.strip():
        return js
    return rjsmin.jsmin(js)


def _split_starttag(starttag_text: str) -> tuple[list[tuple[str, str | None]], bool]:
    """Pull (name, raw value) pairs out of a raw start tag.

    Raw values keep their quotes; a bare attribute has a value of None. The
    flag tells whether the tag really self-closes: in `<a href=/foo/>` the
    slash belongs to the unquoted value.
    """
    inner = starttag_text[1:-1].rstrip()
    self_closing = bool(_CLOSING_SLASH.search(inner))
    if self_closing:
        inner = inner[:-1]
    match = _TAG_NAME.match(inner)
    rest = inner[match.end() :] if match else inner
    return [(k, v or None) for k, v in _ATTRIBUTE.findall(rest)], self_closing


class _MinifyingHTMLParser(HTMLParser):
    """Re-emits parsed HTML with the configured minifications applied."""

    def __init__(self, options: MinifyOptions) -> None:
        super().__init__(convert_charrefs=options.decode_entities)
        self.options = options
        self.out: list[str] = []
        self._raw_tag: str | None = None
        self._raw_type = ""
        self._raw_buf: list[str] = []
        self._preserve_depth = 0
        self._source = ""
        self._line_starts = [0]

    def feed_document(self, html: str) -> None:
        """Feed a whole document, remembering it so references can be re-emitted as written."""
        self._source = html
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", html)]
        self.feed(html)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._emit_starttag(tag)
        if tag in RAW_TEXT_TAGS:
            self._raw_tag = tag
            self._raw_type = (dict(attrs).get("type") or "").strip().lower()
            self._raw_buf = []
        elif tag in PRESERVE_WHITESPACE_TAGS:
            self._preserve_depth += 1

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._emit_starttag(tag)

    def handle_endtag(self, tag: str) -> None:
        if self._raw_tag == tag:
            self._flush_raw()
        elif tag in PRESERVE_WHITESPACE_TAGS and self._preserve_depth:
            self._preserve_depth -= 1

        if self.options.remove_optional_tags and tag in OPTIONAL_END_TAGS:
            return
        self.out.append(f"</{tag}>")

    def handle_data(self, data: str) -> None:
        if self._raw_tag:
            self._raw_buf.append(data)
            return
        if self.options.decode_entities:
            data = escape(data, quote=False)
        if self.options.collapse_whitespace and not self._preserve_depth:
            data = _WHITESPACE.sub(" ", data)
        self.out.append(data)

    def handle_entityref(self, name: str) -> None:
        self._append_text(self._reference(f"&{name}"))

    def handle_charref(self, name: str) -> None:
        self._append_text(self._reference(f"&#{name}"))

    def handle_comment(self, data: str) -> None:
        conditional = _CONDITIONAL_COMMENT.match(data)
        if conditional and self.options.process_conditional_comments:
            opening, body, closing = conditional.groups()
            self.out.append(f"<!--{opening}{minify(body, self.options)}{closing}-->")
            return
        # Conditional and <!--! --> comments are kept even when stripping
        if not self.options.remove_comments or data.startswith(("!", "[if", "<![endif]")):
            self.out.append(f"<!--{data}-->")

    def handle_decl(self, decl: str) -> None:
        self.out.append(f"<!{decl}>")

    def handle_pi(self, data: str) -> None:
        self.out.append(f"<?{data}>")

    def unknown_decl(self, data: str) -> None:
        self.out.append(f"<![{data}]>")

    def finish(self) -> None:
        """Flush a script or style element the input never closed."""
        if self._raw_tag:
            self._flush_raw()

    def _reference(self, text: str) -> str:
        # getpos() still points at the "&" while the reference is handled
        line, offset = self.getpos()
        start = self._line_starts[line - 1] + offset
        end = start + len(text)
        if self._source[start:end] == text and self._source[end : end + 1] != ";":
            return text
        return text + ";"

    def _append_text(self, text: str) -> None:
        if self._raw_tag:
            self._raw_buf.append(text)
        else:
            self.out.append(text)

    def _flush_raw(self) -> None:
        content = "".join(self._raw_buf)
        if self._raw_tag == "style" and self.options.minify_css:
            content = minify_css(content)
        elif self._raw_tag == "script" and self.options.minify_js and self._raw_type in JS_TYPES:
            content = minify_js(content)
        self.out.append(content)
        self._raw_tag = None
        self._raw_type = ""
        self._raw_buf = []

    def _emit_starttag(self, tag: str) -> None:
        raw_attrs, self_closing = _split_starttag(self.get_starttag_text() or "")
        rendered = [
            a
            for a in (self._attribute(tag, k.lower(), v) for k, v in raw_attrs)
            if a is not None
        ]
        attrs_rendered = "".join(f" {a}" for a in rendered)
        slash = "/" if self_closing and self.options.keep_closing_slash else ""
        self.out.append(f"<{tag}{attrs_rendered}{slash}>")

    def _attribute(self, tag: str, name: str, raw_value: str | None) -> str | None:
        opts = self.options
        if raw_value is None:
            return name

        quote = raw_value[0] if raw_value[0] in "\"'" else ""
        value = raw_value[1:-1] if quote else raw_value
        plain = value.strip().lower()

        if opts.remove_script_type_attributes and tag == "script" and name == "type":
            if plain in JS_TYPES:
                return None
        if opts.remove_style_link_type_attributes and tag in {"style", "link"} and name == "type":
            if plain == "text/css":
                return None
        if opts.collapse_boolean_attributes and name in BOOLEAN_ATTRIBUTES:
            return name
        if opts.remove_empty_attributes and not value.strip():
            if name in EMPTY_REMOVABLE_ATTRIBUTES or name.startswith("on"):
                return None

        if opts.minify_css and name == "style" and "&" not in value:
            minified = minify_style_attribute(value)
            if (quote or '"') not in minified:
                value = minified

        if opts.remove_attribute_quotes and _UNQUOTED_SAFE.match(value):
            return f"{name}={value}"
        quote = quote or '"'
        return f"{name}={quote}{value}{quote}"
