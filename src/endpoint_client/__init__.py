"""Declarative endpoint HTTP client.

This package describes API endpoints as plain values (base URL, path,
method, headers, JSON parameters) and executes them with a single
generic request routine that decodes the JSON response into a caller
specified type, reporting failures as a small flat set of error kinds.

:var __version__: Current package version
:type __version__: str
"""

from .endpoint import Endpoint, HTTPMethod, StaticEndpoint
from .exceptions import NetworkError, NetworkServiceError
from .result import Result
from .service import NetworkService

__version__ = "0.1.0"

__all__ = [
    "Endpoint",
    "HTTPMethod",
    "StaticEndpoint",
    "NetworkError",
    "NetworkServiceError",
    "Result",
    "NetworkService",
]
