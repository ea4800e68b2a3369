"""
Batch runner for report word-frequency analysis.

This module coordinates the per-document pipeline:
- Resolve the Document Reference (download when remote)
- Extract page text from the PDF
- Reflow pages into fixed-width lines and tokenize
- Count words and stack every document's rows into one table
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import AbstractSet, List, Mapping, Optional

from .aggregator import count_words
from .config import Settings
from .errors import AnalysisError, EmptyDocumentError
from .loader import SourceLoader
from .models import BatchTable, DocumentResult
from .pdf_extractor import PDFExtractor
from .segmenter import segment_pages
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

FAILURE_POLICIES = ("abort", "skip")


class ReportBatchRunner:
    """Run the extraction pipeline over an ordered set of documents."""

    def __init__(self,
                 settings: Optional[Settings] = None,
                 loader: Optional[SourceLoader] = None,
                 extractor: Optional[PDFExtractor] = None,
                 stopwords: Optional[AbstractSet[str]] = None):
        """
        Initialize the runner.

        Args:
            settings: Pipeline settings (read from the environment when omitted)
            loader: Source loader; built from settings when omitted
            extractor: PDF extractor
            stopwords: Stopword set used when ``remove_stopwords`` is on
        """
        self.settings = settings or Settings()
        if self.settings.failure_policy not in FAILURE_POLICIES:
            raise ValueError(
                f"failure_policy must be one of {FAILURE_POLICIES}, got {self.settings.failure_policy!r}"
            )
        self.loader = loader or SourceLoader(
            timeout=self.settings.request_timeout,
            user_agent=self.settings.user_agent,
            max_retries=self.settings.max_retries,
            backoff_factor=self.settings.backoff_factor,
        )
        self.extractor = extractor or PDFExtractor()
        self.stopwords = stopwords

    def process_document(self, document_id: str, reference: str) -> DocumentResult:
        """Run loader through aggregator for one document, capturing failures."""
        result = DocumentResult(document_id=document_id, reference=reference)
        logger.info(f"Processing {document_id} from {reference}")

        try:
            with self.loader.open(reference, document_id=document_id) as path:
                pages = self.extractor.extract_pages(path, document_id=document_id)

            lines = segment_pages(pages, width=self.settings.segment_width)
            tokens = tokenize(
                lines,
                remove_stopwords=self.settings.remove_stopwords,
                stopwords=self.stopwords,
            )
            result.pages, result.lines, result.tokens = len(pages), len(lines), len(tokens)

            if not tokens:
                if self.settings.fail_on_empty:
                    raise EmptyDocumentError("no tokens extracted", document_id=document_id)
                logger.warning(f"{document_id} produced no tokens; emitting zero rows")

            result.rows = count_words(document_id, tokens)
        except AnalysisError as e:
            e.document_id = e.document_id or document_id
            result.error = e
            logger.error(str(e), extra={"document_id": document_id, "stage": e.stage})
            return result

        logger.info(
            f"Processed {document_id}: {result.pages} pages, {result.lines} lines, "
            f"{result.tokens} tokens, {len(result.rows)} unique words"
        )
        return result

    def run_documents(self, documents: Mapping[str, str]) -> List[DocumentResult]:
        """Process documents, returning results in mapping order.

        Sequential runs under the ``abort`` policy stop at the first failure.
        """
        items = list(documents.items())
        workers = max(1, self.settings.max_workers)

        if workers == 1 or len(items) <= 1:
            results = []
            for doc_id, ref in items:
                result = self.process_document(doc_id, ref)
                results.append(result)
                if not result.ok and self.settings.failure_policy == "abort":
                    break
            return results

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.process_document, doc_id, ref) for doc_id, ref in items]
            return [future.result() for future in futures]

    def run(self, documents: Mapping[str, str]) -> BatchTable:
        """
        Build the Report Batch Table for the given documents.

        With the ``abort`` policy the first failing document (in mapping
        order) is raised; with ``skip`` failing documents are logged and
        left out of the table.
        """
        if not documents:
            raise ValueError("No documents to analyze")

        results = self.run_documents(documents)
        kept: List[DocumentResult] = []
        for result in results:
            if result.ok:
                kept.append(result)
                continue
            if self.settings.failure_policy == "abort":
                raise result.error
            logger.warning(f"Skipping {result.document_id}: {result.error}")

        table = BatchTable.from_results(kept)
        logger.info(f"Batch complete: {len(kept)}/{len(results)} documents, {len(table)} rows")
        return table
