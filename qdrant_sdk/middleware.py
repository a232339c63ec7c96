"""
Request middleware chain for the REST transport.

Each middleware is a callable ``(request, call_next) -> requests.Response``
that may inspect or change the outgoing Request, short-circuit with an
error, or inspect the response on the way back. The order produced by
build_middlewares() is significant:

1. identification (User-Agent and caller headers), always present
2. API key, only when a key is configured
3. timeout, only when the timeout is finite
4. response validation, always present and innermost
"""

import math
import time
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import requests

from .auth import API_KEY_HEADER
from .exceptions import (
    RequestTimeoutError,
    ResourceExhaustedError,
    UnexpectedResponseError,
)

SUCCESS_STATUS_CODES = (200, 201)


@dataclass
class Request:
    """Outgoing HTTP request as seen by the middleware chain."""

    method: str
    url: str
    headers: Dict[str, str] = dataclass_field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    json: Any = None
    timeout: Optional[float] = None
    # time.monotonic() value after which the call is abandoned
    deadline: Optional[float] = None


Handler = Callable[[Request], requests.Response]
Middleware = Callable[[Request, Handler], requests.Response]


def is_finite_timeout(timeout: Optional[float]) -> bool:
    return timeout is not None and math.isfinite(timeout)


class UserAgentMiddleware:
    """Tags every request with the client identification and extra headers."""

    def __init__(
        self,
        user_agent: str,
        headers: Optional[Dict[str, Union[str, int, Sequence[str], None]]] = None,
    ):
        self.user_agent = user_agent
        self.headers: Dict[str, str] = {}
        for name, value in (headers or {}).items():
            if not value:
                continue
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(item) for item in value)
            self.headers[name] = str(value)

    def __call__(self, request: Request, call_next: Handler) -> requests.Response:
        request.headers["User-Agent"] = self.user_agent
        request.headers.update(self.headers)
        return call_next(request)


class ApiKeyMiddleware:
    """Injects the API key header."""

    def __init__(self, api_key: str):
        self.api_key = api_key

    def __call__(self, request: Request, call_next: Handler) -> requests.Response:
        request.headers[API_KEY_HEADER] = self.api_key
        return call_next(request)


class TimeoutMiddleware:
    """Bounds each call by the configured timeout.

    The clock starts when the call enters this middleware. The transport
    gets both a per-socket-operation timeout and an absolute deadline for
    the whole call, headers and body included; when the deadline passes the
    connection is shut down and the call fails. A timeout of zero or less
    has already expired and the request is never sent.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout

    def __call__(self, request: Request, call_next: Handler) -> requests.Response:
        if self.timeout <= 0:
            raise RequestTimeoutError(
                f"Request to {request.url} cancelled: timeout of {self.timeout} seconds elapsed"
            )

        request.timeout = self.timeout
        request.deadline = time.monotonic() + self.timeout
        try:
            return call_next(request)
        except requests.Timeout as e:
            raise RequestTimeoutError(
                f"Request to {request.url} timed out after {self.timeout} seconds"
            ) from e


class ResponseValidationMiddleware:
    """Turns every non-200/201 response into an exception."""

    def __call__(self, request: Request, call_next: Handler) -> requests.Response:
        response = call_next(request)

        if response.status_code in SUCCESS_STATUS_CODES:
            return response

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            if retry_after:
                raise ResourceExhaustedError(
                    _error_message(response),
                    retry_after,
                    status_code=response.status_code,
                )

        raise UnexpectedResponseError.for_response(response)


def build_middlewares(
    user_agent: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    headers: Optional[Dict[str, Any]] = None,
) -> List[Middleware]:
    """Build the ordered middleware list for a client.

    Args:
        user_agent: Value of the User-Agent header.
        api_key: API key; adds the API key middleware when set.
        timeout: Timeout in seconds; adds the timeout middleware when finite.
        headers: Extra headers sent with every request.

    Returns:
        Middlewares, outermost first.
    """
    middlewares: List[Middleware] = [UserAgentMiddleware(user_agent, headers)]
    if api_key is not None:
        middlewares.append(ApiKeyMiddleware(api_key))
    if is_finite_timeout(timeout):
        middlewares.append(TimeoutMiddleware(timeout))
    middlewares.append(ResponseValidationMiddleware())
    return middlewares


def compose(middlewares: Sequence[Middleware], handler: Handler) -> Handler:
    """Wrap ``handler`` so that ``middlewares[0]`` runs first."""
    chain = handler
    for middleware in reversed(middlewares):
        chain = _bind(middleware, chain)
    return chain


def _bind(middleware: Middleware, call_next: Handler) -> Handler:
    def handle(request: Request) -> requests.Response:
        return middleware(request, call_next)

    return handle


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.reason or "Too Many Requests"
    status = data.get("status") if isinstance(data, dict) else None
    if isinstance(status, dict) and status.get("error"):
        return status["error"]
    return response.reason or "Too Many Requests"
