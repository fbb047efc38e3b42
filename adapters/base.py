# adapters/base.py — HTTP transport shared by REST adapters
from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

import requests

from config import SETTINGS, ClientConfig
from helpers.errors import NetworkError, ParseError, RequestTimeoutError

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]


class BaseAdapter:
    """
    One HTTPS exchange per call, run on a worker thread.

    Public operations hand back a Future that resolves exactly once, either
    to the parsed JSON body or to an AltsTradeError. An optional
    callback(error, result) is fired off the same Future.
    """

    def __init__(self, cfg: Optional[ClientConfig] = None, session: Optional[requests.Session] = None):
        self.cfg = cfg or SETTINGS
        self.exchange_name = self.cfg.host
        self.session = session or requests.Session()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    # ---------------- Transport ---------------- #
    def _request(self, method: str, path: str, body: Optional[str] = None,
                 auth_headers: Optional[Dict[str, str]] = None) -> Any:
        url = self.cfg.base_url + path
        headers = {"User-Agent": self.cfg.user_agent}
        data = None

        if method == "POST":
            data = (body or "").encode("utf-8")
            headers["Content-Length"] = str(len(data))
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            headers.update(auth_headers or {})

        logger.debug(f"{self.exchange_name} {method} {path}")
        try:
            r = self.session.request(method, url, data=data, headers=headers, timeout=self.cfg.timeout_s)
        except requests.exceptions.Timeout as e:
            logger.debug(f"{self.exchange_name} {method} {path} timed out after {self.cfg.timeout_s}s")
            raise RequestTimeoutError(f"{method} {path} idle for {self.cfg.timeout_s}s, aborted", original=e) from e
        except requests.exceptions.RequestException as e:
            logger.debug(f"{self.exchange_name} {method} {path} failed: {e}")
            raise NetworkError(str(e), original=e) from e

        if not 200 <= r.status_code < 300:
            logger.debug(f"{self.exchange_name} {method} {path} -> HTTP {r.status_code}")

        text = r.content.decode("utf-8", errors="replace")
        try:
            return json.loads(text)
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {path}: {e}", original=e, body=text) from e

    # ---------------- Completion ---------------- #
    def _submit(self, fn: Callable[..., Any], *args, callback: Optional[Callback] = None) -> Future:
        return self._deliver(self._pool().submit(fn, *args), callback)

    def _failed(self, exc: BaseException, callback: Optional[Callback] = None) -> Future:
        future: Future = Future()
        future.set_exception(exc)
        return self._deliver(future, callback)

    @staticmethod
    def _deliver(future: Future, callback: Optional[Callback]) -> Future:
        if callback is None:
            return future

        def _done(f: Future):
            if f.cancelled():
                callback(CancelledError(), None)
                return
            exc = f.exception()
            if exc is not None:
                callback(exc, None)
            else:
                callback(None, f.result())

        future.add_done_callback(_done)
        return future

    # ---------------- Lifecycle ---------------- #
    def _pool(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.cfg.max_workers,
                    thread_name_prefix=self.exchange_name,
                )
            return self._executor

    def close(self) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
