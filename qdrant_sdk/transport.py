"""
REST transport for the Qdrant SDK.

Owns the pooled requests Session and pushes every call through the
middleware chain before it reaches the network.
"""

import logging
import socket
import threading
import time
from typing import Any, Dict, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import ReadTimeoutError

from .exceptions import NetworkError, QdrantException
from .middleware import Middleware, Request, compose
from .utils import build_api_url, encode_query_params, sanitize_for_logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONNECTIONS = 25


class Transport:
    """Sends REST requests relative to a base URI."""

    def __init__(
        self,
        base_url: str,
        middlewares: Sequence[Middleware],
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
    ):
        """Initialize the transport.

        Args:
            base_url: Base URI, including any path prefix.
            middlewares: Request middlewares, outermost first.
            max_connections: Maximum number of pooled keep-alive connections.
        """
        self.base_url = base_url
        self.max_connections = max_connections
        self.session = self._create_session()
        self._handler = compose(middlewares, self._send)

    def _create_session(self) -> requests.Session:
        """Create a requests Session with connection pooling.

        Returns:
            Configured requests Session object with persistent connections.
        """
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=10,
            pool_maxsize=self.max_connections,
            max_retries=0,  # retries are left to the caller
            pool_block=False,
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Content-Type": "application/json"})

        return session

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """Send a request through the middleware chain.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            path: Endpoint path relative to the base URI.
            params: Query parameters; None values are dropped.
            json: JSON body.

        Returns:
            Decoded JSON body, the raw text for non-JSON bodies, or None for
            an empty body.

        Raises:
            QdrantException: If the request fails or the response is rejected.
        """
        request = Request(
            method=method,
            url=build_api_url(self.base_url, path),
            params=encode_query_params(params),
            json=json,
        )
        response = self._handler(request)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _send(self, request: Request) -> requests.Response:
        logger.debug(
            "%s %s params=%s",
            request.method,
            request.url,
            sanitize_for_logging(request.params),
        )
        try:
            response = self.session.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                params=request.params,
                json=request.json,
                timeout=request.timeout,
                stream=True,
            )
            self._read_body(response, request.deadline)
            return response
        except requests.Timeout:
            # mapped by the timeout middleware
            raise
        except requests.ConnectionError as e:
            # requests reports a stalled body read as a ConnectionError
            if _is_read_timeout(e):
                raise requests.ReadTimeout(str(e), request=e.request) from e
            raise NetworkError(f"Network connection failed: {str(e)}")
        except requests.RequestException as e:
            raise QdrantException(f"Request failed: {str(e)}")

    def _read_body(self, response: requests.Response, deadline: Optional[float]) -> None:
        """Read the whole response body, giving up once the deadline passes.

        The socket timeout only bounds a single read, so a server trickling
        bytes could hold the call open indefinitely. A timer shuts the
        connection down at the deadline, which wakes the blocked read.

        Raises:
            requests.ReadTimeout: If the deadline passed before the body was read.
        """
        if deadline is None:
            response.content  # reads and caches the body
            return

        expired = threading.Event()
        sock = _response_socket(response)

        def expire():
            expired.set()
            if sock is None:
                response.close()
                return
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass  # connection already closed

        timer = threading.Timer(max(deadline - time.monotonic(), 0.0), expire)
        timer.daemon = True
        timer.start()
        try:
            response.content
        except requests.RequestException as e:
            if expired.is_set():
                raise _deadline_error(response) from e
            raise
        finally:
            timer.cancel()

        if expired.is_set():
            response.close()
            raise _deadline_error(response)

    def close(self) -> None:
        self.session.close()


def _response_socket(response: requests.Response) -> Optional[socket.socket]:
    connection = getattr(response.raw, "connection", None)
    return getattr(connection, "sock", None)


def _deadline_error(response: requests.Response) -> requests.ReadTimeout:
    return requests.ReadTimeout(
        f"Read timed out: deadline passed while reading the body of {response.url}",
        response=response,
    )


def _is_read_timeout(error: requests.ConnectionError) -> bool:
    cause = error.args[0] if error.args else None
    return isinstance(cause, ReadTimeoutError) or isinstance(error.__context__, ReadTimeoutError)
