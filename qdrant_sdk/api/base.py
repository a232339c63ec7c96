"""
Declarative endpoint bindings.

An Endpoint describes one REST operation: its HTTP method, its path
template and which keyword arguments travel in the query string. When
called through a sub-client, path placeholders are filled from the keyword
arguments of the same name, query names go to the query string, and every
remaining non-None argument becomes the JSON body.
"""

import re
from typing import Any, Iterable

from ..exceptions import QdrantException
from ..utils import drop_none, format_path

_PATH_PARAM = re.compile(r"{(\w+)}")
_BODYLESS_METHODS = ("GET", "DELETE")


class Endpoint:
    """One remote operation bound to an HTTP method and path."""

    def __init__(self, method: str, path: str, query: Iterable[str] = (), doc: str = ""):
        self.method = method.upper()
        self.path = path
        self.query = frozenset(query)
        self.path_params = tuple(_PATH_PARAM.findall(path))
        self.doc = doc
        self.name = ""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        def call(**kwargs: Any) -> Any:
            return self.invoke(instance._transport, **kwargs)

        call.__name__ = self.name
        call.__doc__ = self.doc or f"{self.method} {self.path}"
        return call

    def invoke(self, transport, **kwargs: Any) -> Any:
        """Split ``kwargs`` into path, query and body and send the request."""
        path_values = {}
        for name in self.path_params:
            if kwargs.get(name) is None:
                raise QdrantException(f"{self.name}() missing required argument '{name}'")
            path_values[name] = kwargs.pop(name)

        params = {name: kwargs.pop(name) for name in list(kwargs) if name in self.query}

        body = None
        if self.method not in _BODYLESS_METHODS:
            body = drop_none(kwargs)
        elif drop_none(kwargs):
            raise QdrantException(
                f"{self.name}() got unexpected arguments: {', '.join(sorted(drop_none(kwargs)))}"
            )

        return transport.request(
            self.method,
            format_path(self.path, path_values),
            params=params,
            json=body,
        )

    def __repr__(self) -> str:
        return f"Endpoint({self.method} {self.path})"


class ApiBase:
    """Base class for REST sub-clients."""

    def __init__(self, transport):
        self._transport = transport

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url='{self._transport.base_url}')"
