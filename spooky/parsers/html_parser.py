from __future__ import annotations
import warnings
from typing import Iterator, List

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

# Markup-free inputs (raw JavaScript, a bare URL) make bs4 warn; they are expected here.
warnings.filterwarnings("ignore", category=UserWarning, module=r"(bs4|spooky\.parsers\.html_parser)(\..*)?$")

# String nodes that are not document text.
_NON_TEXT = (Comment, Declaration, Doctype, ProcessingInstruction)


def _iter_text_nodes(root) -> Iterator[str]:
    # pre-order walk with an explicit stack; deeply nested markup must not
    # hit the recursion limit
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, NavigableString):
            if not isinstance(node, _NON_TEXT):
                yield str(node)
            continue
        children = getattr(node, "contents", None)
        if children:
            stack.extend(reversed(children))


def extract_text(content: str) -> str:
    """Reduce HTML to the text worth scanning.

    Text nodes are kept in document order, including the bodies of
    ``<script>`` and ``<style>`` elements, and joined with single spaces. Tag
    names and attribute values are dropped. If the input cannot be parsed it
    is returned unchanged so plain text and raw JavaScript are still scanned.
    """
    if not content:
        return content
    try:
        soup = BeautifulSoup(content, "html.parser")
        fragments: List[str] = [t for t in _iter_text_nodes(soup) if t]
    except Exception:
        return content
    return " ".join(fragments)
