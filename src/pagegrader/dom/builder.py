# src/pagegrader/dom/builder.py
import logging

from bs4 import BeautifulSoup

from .document import ParsedDocument

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    Builder responsible for turning raw submission HTML into a ParsedDocument.
    Student markup is frequently invalid, so building never raises.
    """

    def __init__(self, features: str = 'html.parser'):
        self.features = features

    def parse_doc(self, html: str) -> ParsedDocument:
        """
        Parses raw HTML content into a ParsedDocument.

        Args:
            html (str): The raw HTML string.

        Returns:
            ParsedDocument: A query view over the page. Empty when the input is
                            empty or could not be parsed at all.
        """
        if not html:
            return ParsedDocument(BeautifulSoup("", self.features))

        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '').strip()
        try:
            # Keep attribute values as written: class=" " must stay distinguishable from class=""
            soup = BeautifulSoup(clean_html, self.features, multi_valued_attributes=None)
        except Exception as e:
            logger.warning("Could not parse submission HTML, grading an empty page: %s", e)
            soup = BeautifulSoup("", self.features)

        return ParsedDocument(soup)
