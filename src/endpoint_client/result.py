"""Single-shot request outcome."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .exceptions import NetworkError, NetworkServiceError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a decoded value or a :class:`NetworkError`, never both.

    Build instances with :meth:`success` or :meth:`failure` rather than
    the constructor.

    :param value: Decoded response value on success
    :param error: Failure kind on failure
    """

    value: Optional[T] = None
    error: Optional[NetworkError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Create a successful result.

        :param value: Decoded response value
        :return: Result holding the value
        """
        return cls(value=value)

    @classmethod
    def failure(cls, error: NetworkError) -> "Result[T]":
        """Create a failed result.

        :param error: Failure kind
        :return: Result holding the failure kind
        """
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the decoded value or raise the failure.

        :return: Decoded response value
        :raises NetworkServiceError: If the result is a failure
        """
        if self.error is not None:
            raise NetworkServiceError(self.error)
        return self.value  # type: ignore[return-value]
