"""
Source loading for report documents.

A Document Reference is either an HTTP(S) URL or a local path. Remote
references are downloaded into a temporary ``.pdf`` file that lives only
for the duration of the ``SourceLoader.open`` context.
"""

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import InvalidReferenceError, NetworkFetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def is_remote(reference: str) -> bool:
    """Return True when the reference should be fetched over the network."""
    return reference.startswith("http")


def build_session(user_agent: str, max_retries: int = 3, backoff_factor: float = 1.0) -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=max_retries,
        connect=max_retries,
        read=max_retries,
        status=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "User-Agent": user_agent,
            "Accept": "application/pdf,*/*;q=0.8",
        }
    )
    return session


class SourceLoader:
    """Resolve Document References to readable local files."""

    def __init__(self,
                 session: Optional[requests.Session] = None,
                 timeout: int = 30,
                 user_agent: str = "report-analyzer/0.1",
                 max_retries: int = 3,
                 backoff_factor: float = 1.0):
        """
        Initialize the loader.

        Args:
            session: Pre-built HTTP session (a retrying session is built when omitted)
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header for the default session
            max_retries: Retry budget for the default session
            backoff_factor: Exponential backoff factor between retries
        """
        self.timeout = timeout
        self.session = session or build_session(user_agent, max_retries, backoff_factor)

    @contextmanager
    def open(self, reference: str, document_id: Optional[str] = None) -> Iterator[Path]:
        """
        Yield a local path for the reference.

        Local paths are yielded unchanged; existence is checked by the
        extractor. Downloaded files are removed when the context exits,
        whether or not the caller succeeded.
        """
        if not reference or not reference.strip():
            raise InvalidReferenceError(
                "document reference must be a non-empty string", document_id=document_id
            )

        if not is_remote(reference):
            yield Path(reference)
            return

        tmp_path = self._download(reference, document_id)
        try:
            yield tmp_path
        finally:
            tmp_path.unlink(missing_ok=True)
            logger.debug(f"Removed temporary file {tmp_path}")

    def _download(self, url: str, document_id: Optional[str]) -> Path:
        logger.info(f"Downloading {url}")
        tmp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(suffix='.pdf', delete=False) as tmp_file:
                tmp_path = Path(tmp_file.name)
                response = self.session.get(url, stream=True, timeout=self.timeout)
                try:
                    response.raise_for_status()
                    size = 0
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            tmp_file.write(chunk)
                            size += len(chunk)
                finally:
                    response.close()
        except (requests.RequestException, OSError) as e:
            # OSError covers temp file creation and writes (full disk, unwritable tmp dir)
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise NetworkFetchError(f"{url}: {e}", document_id=document_id) from e
        except BaseException:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise

        logger.info(f"Downloaded {size} bytes from {url} to {tmp_path}")
        return tmp_path
