"""Declarative descriptions of API endpoints.

An endpoint states where a call goes and what it carries: base URL,
path, HTTP method, headers and JSON body parameters. Concrete endpoints
subclass :class:`Endpoint` and override only what differs from a plain
GET with no body and no extra headers.

Examples
--------
.. code-block:: python

    class UserEndpoint(Endpoint):
        def __init__(self, user_id: int):
            self.user_id = user_id

        @property
        def base_url(self) -> str:
            return "https://api.example.com"

        @property
        def path(self) -> str:
            return f"/v1/users/{self.user_id}"
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


class HTTPMethod(str, Enum):
    """HTTP verbs an endpoint may use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def verb(self) -> str:
        """Return the wire-format verb.

        :return: Verb string sent on the request line
        :rtype: str
        """
        return self.value


class Endpoint(ABC):
    """Describe one API call.

    Only :attr:`base_url` and :attr:`path` are required. :attr:`url` is
    derived from them and cannot be overridden by assignment.
    """

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Return the scheme and host part of the URL.

        :return: Base URL, e.g. ``"https://api.example.com"``
        """
        pass

    @property
    @abstractmethod
    def path(self) -> str:
        """Return the path appended to :attr:`base_url`.

        No separator is inserted, so the path carries its own leading
        slash.

        :return: Path, e.g. ``"/v1/users"``
        """
        pass

    @property
    def method(self) -> HTTPMethod:
        return HTTPMethod.GET

    @property
    def headers(self) -> Dict[str, str]:
        return {}

    @property
    def parameters(self) -> Dict[str, Any]:
        """Return the JSON body parameters.

        When non-empty they are sent as the request body whatever the
        method is.

        :return: Mapping serialized verbatim to JSON
        """
        return {}

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"


class StaticEndpoint(Endpoint):
    """Endpoint built from plain values instead of a subclass.

    :param base_url: Base URL
    :type base_url: str
    :param path: Path appended to the base URL
    :type path: str
    :param method: HTTP method (default: GET)
    :type method: HTTPMethod
    :param headers: Extra request headers
    :type headers: Optional[Dict[str, str]]
    :param parameters: JSON body parameters
    :type parameters: Optional[Dict[str, Any]]
    """

    def __init__(
        self,
        base_url: str,
        path: str,
        method: HTTPMethod = HTTPMethod.GET,
        headers: Optional[Dict[str, str]] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ):
        self._base_url = base_url
        self._path = path
        self._method = HTTPMethod(method)
        self._headers = dict(headers or {})
        self._parameters = dict(parameters or {})

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def path(self) -> str:
        return self._path

    @property
    def method(self) -> HTTPMethod:
        return self._method

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    @property
    def parameters(self) -> Dict[str, Any]:
        return dict(self._parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StaticEndpoint):
            return NotImplemented
        return (
            self._base_url,
            self._path,
            self._method,
            self._headers,
            self._parameters,
        ) == (
            other._base_url,
            other._path,
            other._method,
            other._headers,
            other._parameters,
        )

    def __repr__(self) -> str:
        return (
            f"StaticEndpoint(method={self._method.value!r}, url={self.url!r})"
        )
