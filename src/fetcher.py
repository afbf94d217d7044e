#!/usr/bin/env python3
"""
Response Header Fetcher

Issues a single GET against a target URL and returns the headers of the
first response. Redirects are not followed and certificate verification
is off by default so that self-signed or broken TLS setups can still be
analysed.

The timeout is a wall-clock deadline for the whole request. requests only
bounds each individual socket operation, so a watchdog shuts down the
request's socket once the deadline passes.
"""
import logging
import socket
import threading
import warnings
from typing import List, Optional

import certifi
import requests
import urllib3
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict
from urllib3.connection import HTTPConnection, HTTPSConnection
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool
from urllib3.exceptions import InsecureRequestWarning

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
DEFAULT_USER_AGENT = "HeaderGuardian/1.0"

# Deadline of the fetch running on the current thread, if any
_active = threading.local()


class FetchError(Exception):
    """Raised when the target could not be fetched (network, DNS, TLS, timeout)"""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


def normalize_url(url: str) -> str:
    """Prepend https:// unless the URL already carries an http(s) scheme."""
    if not url.startswith("http://") and not url.startswith("https://"):
        return "https://" + url
    return url


class _Deadline:
    """Shuts down every socket opened for one request when time runs out"""

    def __init__(self, seconds: float):
        self.expired = False
        self._sockets: List[socket.socket] = []
        self._lock = threading.Lock()
        self._timer = threading.Timer(seconds, self._expire)
        self._timer.daemon = True

    def start(self):
        self._timer.start()

    def cancel(self):
        self._timer.cancel()

    def track(self, sock: socket.socket):
        with self._lock:
            if self.expired:
                self._shutdown(sock)
            else:
                self._sockets.append(sock)

    def _expire(self):
        with self._lock:
            self.expired = True
            for sock in self._sockets:
                self._shutdown(sock)

    @staticmethod
    def _shutdown(sock: socket.socket):
        # Plain socket shutdown also unblocks a TLS read on the same fd
        try:
            socket.socket.shutdown(sock, socket.SHUT_RDWR)
        except OSError:
            pass


class _DeadlineConnectionMixin:
    def _new_conn(self):
        sock = super()._new_conn()
        deadline = getattr(_active, "deadline", None)
        if deadline is not None:
            deadline.track(sock)
        return sock


class _DeadlineHTTPConnection(_DeadlineConnectionMixin, HTTPConnection):
    pass


class _DeadlineHTTPSConnection(_DeadlineConnectionMixin, HTTPSConnection):
    pass


class _DeadlineHTTPConnectionPool(HTTPConnectionPool):
    ConnectionCls = _DeadlineHTTPConnection


class _DeadlineHTTPSConnectionPool(HTTPSConnectionPool):
    ConnectionCls = _DeadlineHTTPSConnection


class _DeadlineAdapter(HTTPAdapter):
    def init_poolmanager(self, *args, **kwargs):
        super().init_poolmanager(*args, **kwargs)
        self.poolmanager.pool_classes_by_scheme = {
            "http": _DeadlineHTTPConnectionPool,
            "https": _DeadlineHTTPSConnectionPool,
        }


def _first_values(resp: requests.Response) -> CaseInsensitiveDict:
    """Header map keeping only the first value of repeated headers"""
    raw = resp.raw.headers
    return CaseInsensitiveDict({name: raw.getlist(name)[0] for name in raw})


class HeaderFetcher:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 verify_tls: bool = False,
                 follow_redirects: bool = False,
                 user_agent: str = DEFAULT_USER_AGENT,
                 ca_bundle: Optional[str] = None):
        """
        Args:
            timeout: Seconds allowed for the whole request
            verify_tls: Validate the server certificate
            follow_redirects: Follow 3xx responses instead of returning them
            user_agent: User-Agent request header
            ca_bundle: CA file used when verify_tls is on (default: certifi)
        """
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.follow_redirects = follow_redirects
        self.user_agent = user_agent
        self.ca_bundle = ca_bundle

    def _verify_option(self):
        if not self.verify_tls:
            return False
        return self.ca_bundle or certifi.where()

    def fetch(self, url: str) -> CaseInsensitiveDict:
        """GET *url* and return its response headers.

        The body is never read; the connection is released once the
        headers are in. Repeated headers keep their first value.

        Raises:
            FetchError: on connection, DNS, TLS, URL or timeout failures
        """
        deadline = _Deadline(self.timeout)
        _active.deadline = deadline
        deadline.start()
        try:
            headers = self._get(url)
        except (requests.exceptions.RequestException, urllib3.exceptions.HTTPError) as exc:
            if deadline.expired or isinstance(exc, requests.exceptions.Timeout):
                logger.warning("Timed out fetching %s: %s", url, exc)
                raise FetchError(url, f"request timed out after {self.timeout}s") from exc
            if isinstance(exc, requests.exceptions.SSLError):
                logger.warning("TLS error fetching %s: %s", url, exc)
                raise FetchError(url, f"TLS error: {exc}") from exc
            logger.warning("Failed to fetch %s: %s", url, exc)
            raise FetchError(url, str(exc)) from exc
        finally:
            deadline.cancel()
            _active.deadline = None

        # A shutdown mid-headers can still parse as a short, complete response
        if deadline.expired:
            logger.warning("Timed out fetching %s", url)
            raise FetchError(url, f"request timed out after {self.timeout}s")
        return headers

    def _get(self, url: str) -> CaseInsensitiveDict:
        with warnings.catch_warnings():
            if not self.verify_tls:
                warnings.simplefilter("ignore", InsecureRequestWarning)
            with requests.Session() as session:
                adapter = _DeadlineAdapter()
                session.mount("http://", adapter)
                session.mount("https://", adapter)
                with session.get(
                    url,
                    headers={"User-Agent": self.user_agent},
                    timeout=self.timeout,
                    verify=self._verify_option(),
                    allow_redirects=self.follow_redirects,
                    stream=True,
                ) as resp:
                    logger.info("Fetched %s (HTTP %d, %d headers)",
                                url, resp.status_code, len(resp.headers))
                    return _first_values(resp)
