# bgg_client/engine.py
import logging
import threading
from concurrent.futures import Future, InvalidStateError, ThreadPoolExecutor
from typing import Any, Callable, Optional

from .exceptions import BGGCallbackError, BGGClientClosedError, BGGException
from .mapper import Mapper
from .response import Response
from .transport import Transport

log = logging.getLogger(__name__)


def log_callback_error(error: BGGCallbackError):
    log.error(f"Completion callback failed: {error.message}", exc_info=error.__cause__ or error)


class ExecutionEngine:
    """
    Runs calls on a thread pool and resolves their futures with a Response.

    Pages of one call are fetched one after the other by the same worker;
    separate calls run concurrently and share only the transport.
    """

    def __init__(
        self,
        transport: Transport,
        mapper: Mapper,
        max_workers: int = 4,
        callback_error_handler: Optional[Callable[[BGGCallbackError], None]] = None,
    ):
        self.transport = transport
        self.mapper = mapper
        self.callback_error_handler = callback_error_handler or log_callback_error
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="bgg-client")
        self._closed = False
        self._lock = threading.Lock()
        self._local = threading.local()

    def fetch(self, request):
        """Fetches and maps a single request. Raises a BGGException on failure."""
        url = request.url
        log.debug(f"Fetching {request.endpoint.value}: {url}")
        body = self.transport.fetch(url)
        return self.mapper.map(request.endpoint, body)

    def submit(self, job: Callable[[Future], Any], on_complete: Optional[Callable[[Response], None]] = None) -> Future:
        """
        Schedules `job` and returns a future that resolves to its Response.

        The job receives the future so it can stop early once it is cancelled.
        A BGGException raised by the job becomes an error Response; anything
        else is a bug and is set as the future's exception.
        """
        future: Future = Future()
        if on_complete is not None:
            future.add_done_callback(lambda done: self._notify(done, on_complete))
        with self._lock:
            if self._closed:
                raise BGGClientClosedError("Cannot submit a call to a closed client.")
            self._executor.submit(self._run, job, future)
        return future

    def _run(self, job: Callable[[Future], Any], future: Future):
        self._local.worker = True
        if future.cancelled():
            return
        try:
            response = Response.success(job(future))
        except BGGException as e:
            log.debug(f"Call failed with {e.kind}: {e.message}")
            response = Response.failure(e)
        except Exception as e:
            log.exception("Unexpected error while executing a call")
            self._resolve(future, exception=e)
            return
        self._resolve(future, response=response)

    def _resolve(self, future: Future, response: Optional[Response] = None, exception: Optional[BaseException] = None):
        if future.cancelled():
            log.debug("Call was cancelled, discarding its result")
            return
        try:
            if exception is not None:
                future.set_exception(exception)
            else:
                future.set_result(response)
        except InvalidStateError:
            log.debug("Call was cancelled while finishing, discarding its result")

    def _notify(self, future: Future, on_complete: Callable[[Response], None]):
        if future.cancelled() or future.exception() is not None:
            return
        try:
            on_complete(future.result())
        except Exception as e:
            error = BGGCallbackError(f"{type(e).__name__}: {e}")
            error.__cause__ = e
            self.callback_error_handler(error)

    def close(self, wait: bool = True):
        """
        Stops accepting calls and shuts the pool down.

        A worker cannot wait for itself, so when called from a completion
        callback the pool is shut down without waiting for running calls.
        """
        with self._lock:
            self._closed = True
        if wait and getattr(self._local, "worker", False):
            log.debug("Closing from a worker thread, not waiting for running calls")
            wait = False
        self._executor.shutdown(wait=wait)
