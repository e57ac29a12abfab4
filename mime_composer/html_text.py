"""HTML to plain-text conversion for the text/plain alternative."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
    "h4", "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre",
    "section", "table", "tr", "ul",
]
_DROP_TAGS = ["script", "style", "head", "title", "noscript", "template"]
_SPACE_RE = re.compile(r"[^\S\n]+")
_INLINE_WS_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def html_to_text(markup: str) -> str:
    """Render *markup* as readable plain text.

    Block elements and ``<br>`` become line breaks, links keep their
    target in brackets, and scripts, styles and comments are dropped.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup(_DROP_TAGS):
        # <title> goes away with its <head>
        if not tag.decomposed:
            tag.decompose()

    for node in soup.find_all(string=True):
        if isinstance(node, PreformattedString):
            node.extract()
        elif node.find_parent("pre") is None:
            node.replace_with(_INLINE_WS_RE.sub(" ", str(node)))

    for link in soup.find_all("a", href=True):
        href = link["href"].strip()
        label = link.get_text().strip()
        if href and not href.startswith(("#", "mailto:")) and href != label:
            link.append(f" [{href}]")

    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.insert_before("\n")
        block.append("\n")

    lines = [_SPACE_RE.sub(" ", line).strip() for line in soup.get_text().splitlines()]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()
