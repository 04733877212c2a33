"""HTML pieces the page is stitched together from."""

from __future__ import annotations

from html import escape

# Closes the navigation column opened by the start fragment
CONTENT_AREA_OPEN = (
    '</nav><main class="col-sm-12 col-md-8 col-lg-9" '
    'style="height: 100%;overflow-y: auto; background: #eceef2; padding: 0;">'
)

TOP_ANCHOR = '<a id="top">&nbsp;</a>'

SUBLINK_CLASS = "sublink-1"

_SECTION_OPEN = '<div class="section double-padded">'
_CARD_OPEN = f'<div class="card fluid">{_SECTION_OPEN}'
_CARD_CLOSE = "</div></div><br/>"


def strip_paragraphs(html: str) -> str:
    return html.replace("<p>", "").replace("</p>", "")


def toc_heading(rendered: str) -> str:
    return f"<h3>{strip_paragraphs(rendered)}</h3>"


def toc_link(rendered: str) -> str:
    return strip_paragraphs(rendered).replace("<a", f'<a class="{SUBLINK_CLASS}"') + "\n"


def group_heading(rendered: str) -> str:
    return rendered.replace("<h2>", '<h2 style="text-align:center;">')


def snippet_card(body: str, anchor: str) -> str:
    """Wrap a rendered snippet in a card.

    The first h3 becomes the anchor target and closes the card's title
    section, so the rest of the body sits in a section of its own.
    """
    body = body.replace("<h3", f'<h3 id="{escape(anchor, quote=True)}"', 1)
    body = body.replace("</h3>", f"</h3></div>{_SECTION_OPEN}", 1)
    return f"{_CARD_OPEN}{body}{_CARD_CLOSE}"
