# bgg_client/transport.py
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union

import requests

from .exceptions import BGGAPIError, BGGNetworkError

log = logging.getLogger(__name__)

RETRY_STATUS_CODES = (202, 429, 500, 502, 503, 504)


class Transport(ABC):
    """
    Performs one GET for a fully formed URL and returns the document body.

    Implementations must be safe to call from several threads at once and
    raise a BGGTransportError when no document could be retrieved.
    """

    @abstractmethod
    def fetch(self, url: str) -> Union[bytes, str]:
        """Returns the body. Bytes are preferred so the XML declaration decides the encoding."""

    def close(self):
        pass


class HttpTransport(Transport):
    """
    The default transport, talking to BGG over HTTP.

    BGG answers 202 while it prepares a document (collections, geek lists)
    and 429 when it throttles. Both, and 5xx errors, are retried with an
    exponential backoff that decays again after successful requests.
    """

    def __init__(
        self,
        api_token: Optional[str] = None,
        timeout: float = 30,
        max_retries: int = 10,
        initial_backoff: float = 2,
        backoff_factor: float = 2.0,
        backoff_decay: float = 0.95,
        session: Optional[requests.Session] = None,
    ):
        """
        Initializes the HttpTransport.

        Args:
            api_token (str, optional): The BGG API token for authenticated requests.
            timeout (float): Seconds to wait for the server before giving up on a request.
            max_retries (int): Max number of attempts for retryable statuses (e.g. 429, 202).
            initial_backoff (float): The initial delay in seconds for the first retry.
            backoff_factor (float): The factor by which the backoff delay increases.
            backoff_decay (float): The factor by which the backoff delay decreases after a success.
            session (requests.Session, optional): The session to send requests with.
        """
        self.session = session or requests.Session()
        self.api_token = api_token
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self.backoff_factor = backoff_factor
        self.backoff_decay = backoff_decay
        self._current_backoff = initial_backoff
        self._lock = threading.Lock()

    @property
    def current_backoff(self) -> float:
        with self._lock:
            return self._current_backoff

    def _next_backoff(self) -> float:
        with self._lock:
            backoff = self._current_backoff
            self._current_backoff *= self.backoff_factor
            return backoff

    def _decay_backoff(self):
        with self._lock:
            self._current_backoff = max(self.initial_backoff, self._current_backoff * self.backoff_decay)

    def fetch(self, url: str) -> bytes:
        headers = {}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        for attempt in range(self.max_retries):
            log.debug(f"GET {url} (Attempt {attempt + 1}/{self.max_retries})")
            try:
                response = self.session.get(url, headers=headers, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                raise BGGNetworkError(f"Network error at {url}: {e}") from e

            if response.status_code in RETRY_STATUS_CODES:
                backoff = self._next_backoff()
                log.warning(
                    f"BGG API returned {response.status_code}. Retrying in {backoff}s... (Attempt {attempt + 1}/{self.max_retries})"
                )
                time.sleep(backoff)
                continue

            try:
                response.raise_for_status()
            except requests.exceptions.HTTPError as e:
                raise BGGAPIError(f"BGG API returned {response.status_code} for {url}", raw=response.text) from e

            if not response.content:
                raise BGGAPIError(f"BGG API returned an empty response for {url}.")

            self._decay_backoff()
            return response.content

        raise BGGAPIError(f"Failed to get a valid response from {url} after {self.max_retries} retries.")

    def close(self):
        self.session.close()


class ReplayTransport(Transport):
    """
    Replays canned documents keyed by URL, for tests and fixtures.

    A value that is an exception instance is raised instead of returned. URLs
    without a document raise BGGNetworkError. Every requested URL is recorded
    in `calls`, in request order.
    """

    def __init__(self, documents: Optional[Dict[str, Union[str, bytes, Exception]]] = None):
        self.documents = dict(documents or {})
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def add(self, url: str, document: Union[str, bytes, Exception]):
        with self._lock:
            self.documents[url] = document

    def fetch(self, url: str) -> Union[bytes, str]:
        with self._lock:
            self.calls.append(url)
            document = self.documents.get(url)
        if document is None:
            raise BGGNetworkError(f"No document recorded for {url}")
        if isinstance(document, Exception):
            raise document
        return document
