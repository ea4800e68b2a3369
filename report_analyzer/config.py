import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic_settings import BaseSettings

from .stopwords import DEFAULT_MONTH_NAMES, DEFAULT_SKIP_WORDS


class Settings(BaseSettings):
    # Documents to analyze: id -> URL or local path, in chart order
    documents: Dict[str, str] = {}
    # Optional JSON file with the same shape, appended after `documents`
    documents_file: Optional[Path] = None

    # Pipeline
    segment_width: int = 100
    remove_stopwords: bool = False
    fail_on_empty: bool = False
    failure_policy: str = "abort"  # "abort" or "skip"
    max_workers: int = 1

    # Analysis views
    keywords: List[str] = ["may", "can", "could"]
    trend_word: str = "we"
    skip_words: List[str] = list(DEFAULT_SKIP_WORDS)
    month_names: List[str] = list(DEFAULT_MONTH_NAMES)
    top_n: int = 2

    # Network
    request_timeout: int = 30
    max_retries: int = 3
    backoff_factor: float = 1.0
    user_agent: str = "report-analyzer/0.1 (+https://pypi.org/project/requests/)"

    # Output
    output_dir: Path = Path("charts")
    log_level: str = "INFO"
    log_format: str = "text"

    class Config:
        env_prefix = 'REPORT_ANALYZER_'
        env_file = '.env'
        env_file_encoding = 'utf-8'

    def load_documents(self) -> Dict[str, str]:
        """Merge inline and file-based documents, preserving order."""
        merged: Dict[str, str] = dict(self.documents)
        if self.documents_file:
            with open(self.documents_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"{self.documents_file} must contain a JSON object of id -> reference")
            for doc_id, ref in data.items():
                merged[str(doc_id)] = str(ref)

        for doc_id, ref in merged.items():
            if not ref or not ref.strip():
                raise ValueError(f"Document {doc_id!r} has an empty reference")
        return merged
