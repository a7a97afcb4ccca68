"""Error taxonomy for endpoint requests.

This module defines the flat set of failure kinds a request can end in,
and a structured exception used when a caller prefers raising over
inspecting a :class:`~endpoint_client.result.Result`.
"""

import json
from enum import Enum
from typing import Any, Dict, Optional


class NetworkError(str, Enum):
    """Kinds of failure a single request can end in.

    Every kind is terminal. The executor reports exactly one of these,
    or a decoded value, per invocation.
    """

    URL_ERROR = "urlError"
    DECODING_ERROR = "decodingError"
    RESPONSE_ERROR = "responseError"
    DATA_ERROR = "dataError"
    PARAMETER_ERROR = "parameterError"

    @property
    def description(self) -> str:
        """Return the fixed human-readable description of this kind.

        :return: Description text
        :rtype: str
        """
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    NetworkError.URL_ERROR: "There is error with url",
    NetworkError.DECODING_ERROR: "There is error with decoding",
    NetworkError.RESPONSE_ERROR: "There is error with response code",
    NetworkError.DATA_ERROR: "There is error with data",
    NetworkError.PARAMETER_ERROR: "There is error with parameters",
}


class NetworkServiceError(Exception):
    """Raised when a failed result is unwrapped.

    Carries the :class:`NetworkError` kind together with a message, a
    code for programmatic handling and optional context.

    :param error: The failure kind
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        error: NetworkError,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception from a failure kind."""
        super().__init__(error.description)
        self.error = error
        self.message = error.description
        self.code = error.value
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())
