"""
PDF text extraction for report documents.

Produces one ``PageText`` per physical page, in page order. Layout is not
interpreted: text comes back in the order pdfminer's layout analysis
yields it.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from pdfminer.high_level import extract_pages
from pdfminer.layout import LAParams, LTTextContainer

from .errors import ExtractionError
from .models import PageText

logger = logging.getLogger(__name__)


class PDFExtractor:
    """Extract per-page plain text from PDF files."""

    def __init__(self, laparams: Optional[LAParams] = None):
        self.laparams = laparams or LAParams(
            boxes_flow=0.5,
            word_margin=0.1,
            char_margin=2.0,
            line_margin=0.5,
        )

    def extract_pages(self, pdf_path: Union[str, Path], document_id: Optional[str] = None) -> List[PageText]:
        """
        Extract text from every page of a PDF.

        Args:
            pdf_path: Path to a local PDF file
            document_id: Identifier used in error messages

        Returns:
            Page texts ordered by page number (1-based)
        """
        pdf_path = Path(pdf_path)
        logger.info(f"Extracting text from PDF: {pdf_path}")

        if not pdf_path.exists():
            raise ExtractionError(f"PDF file not found: {pdf_path}", document_id=document_id)

        pages: List[PageText] = []
        try:
            with open(pdf_path, 'rb') as file:
                for page_num, page_layout in enumerate(extract_pages(file, laparams=self.laparams), 1):
                    parts = [
                        element.get_text()
                        for element in page_layout
                        if isinstance(element, LTTextContainer)
                    ]
                    pages.append(PageText(page_index=page_num, text="".join(parts)))
        except Exception as e:
            logger.error(f"Failed to extract from PDF {pdf_path}: {str(e)}")
            raise ExtractionError(f"{pdf_path}: {e}", document_id=document_id) from e

        logger.info(f"Extracted {len(pages)} pages from {pdf_path}")
        return pages
