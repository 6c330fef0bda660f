# src/pagegrader/dom/document.py
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, Declaration, Doctype, NavigableString, PageElement, ProcessingInstruction

# Node types that never belong to a page body.
NON_BODY_NODES = (Doctype, Declaration, ProcessingInstruction)
TEXT_NODES = (NavigableString, CData)


class ParsedDocument:
    """
    Read-only query view over a parsed HTML submission.

    Every rubric check talks to the page through this interface only, so the
    checks never depend on BeautifulSoup directly.
    """

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    def _body_nodes(self) -> List[PageElement]:
        """
        Top-level nodes of the page body.

        html.parser does not invent a <body>. Without one, the body is whatever
        sits in <html> (or at document level) minus the doctype and the <head>.
        """
        if self._soup.body is not None:
            return list(self._soup.body.contents)

        container = self._soup.html or self._soup
        return [
            node for node in container.contents
            if not isinstance(node, NON_BODY_NODES)
            and not (isinstance(node, Tag) and node.name in ('head', 'html'))
        ]

    def _is_implicit_body(self, el: Tag) -> bool:
        return self._soup.body is None and (el is self._soup or el is self._soup.html)

    @staticmethod
    def _node_text(node: PageElement) -> str:
        if isinstance(node, Tag):
            return node.get_text()
        # get_text() matches exact string types, so comments are skipped here too
        return str(node) if type(node) in TEXT_NODES else ""

    def _raw_body_text(self) -> str:
        if self._soup.body is not None:
            return self._soup.body.get_text()
        return "".join(self._node_text(node) for node in self._body_nodes())

    def elements(self, tag: str) -> List[Tag]:
        """Returns all elements with the given tag name, in document order."""
        return self._soup.find_all(tag)

    def count_by_tag(self, tag: str) -> int:
        return len(self.elements(tag))

    def count_with_attribute(self, tag: str, attr: str) -> int:
        """
        Counts elements of `tag` whose raw `attr` value is non-empty.
        class="" does not count; class=" " does.
        """
        return sum(1 for el in self.elements(tag) if el.get(attr))

    def page_text(self) -> str:
        """
        Lowercased visible text of the whole page, <title> included.

        Text inside <script> and <style> is not page text, so a license
        mentioned only in a stylesheet comment is not picked up. Comments are
        skipped as well.
        """
        return self._soup.get_text().lower()

    def parent_text_of(self, tag: str) -> str:
        """
        Lowercased text of the distinct parents of every `tag` element.
        Used to approximate "text near an image". An element at the top of a
        page without <body> gets the body text, never the <head> text.
        """
        chunks: List[str] = []
        seen = set()
        for el in self.elements(tag):
            parent = el.parent
            if parent is None or id(parent) in seen:
                continue
            seen.add(id(parent))
            if self._is_implicit_body(parent):
                chunks.append(self._raw_body_text())
            else:
                chunks.append(parent.get_text())
        return "".join(chunks).lower()

    def body_text(self) -> str:
        """Stripped text of the body."""
        return self._raw_body_text().strip()

    def body_markup(self) -> Optional[str]:
        """Raw inner markup of the body, or None for an empty document."""
        if self._soup.body is not None:
            markup = self._soup.body.decode_contents()
        else:
            markup = "".join(
                node.decode() if isinstance(node, Tag) else node.output_ready()
                for node in self._body_nodes()
            )
        return markup if markup else None
