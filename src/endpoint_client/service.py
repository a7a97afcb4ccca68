"""Request executor for declarative endpoints.

:class:`NetworkService` turns an :class:`~endpoint_client.endpoint.Endpoint`
into one HTTP round trip and decodes the JSON response into a caller
specified type. Every invocation ends in exactly one
:class:`~endpoint_client.result.Result`: the decoded value or one
:class:`~endpoint_client.exceptions.NetworkError` kind.

Two calling styles are offered:

- ``await service.request(endpoint, User)`` returns the result directly.
- ``service.fetch_request(endpoint, User, completion)`` schedules the
  request on the running event loop, returns at once, and later calls
  ``completion(result)`` exactly once.

Failures are never retried and no timeout is applied beyond the one
configured on the transport.
"""

import asyncio
import codecs
import json
import logging
from functools import lru_cache
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Set,
    Tuple,
    Type,
    TypeVar,
)

import httpx
from pydantic import TypeAdapter, ValidationError

from .client_manager import get_http_client
from .endpoint import Endpoint
from .exceptions import NetworkError
from .result import Result

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Endpoint)


@lru_cache(maxsize=128)
def _cached_type_adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _type_adapter(response_type: Any) -> TypeAdapter:
    try:
        return _cached_type_adapter(response_type)
    except TypeError:
        # Unhashable type, e.g. Annotated with dict metadata
        return TypeAdapter(response_type)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(data: bytes) -> Any:
    """Parse bytes as a generic JSON value.

    Any value is accepted at the root. ``NaN`` and the infinities are
    rejected, as is nesting too deep for the parser.

    :param data: Response body, without a byte order mark
    :type data: bytes
    :return: Parsed JSON value
    :raises ValueError: If the bytes are not JSON
    """
    try:
        return json.loads(data, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nested too deeply") from e


def _to_bytes(text: Any) -> bytes:
    if isinstance(text, bytes):
        return text
    return str(text).encode("utf-8", "surrogatepass")


def encode_headers(headers: Dict[str, str]) -> List[Tuple[bytes, bytes]]:
    """Encode endpoint headers as UTF-8 byte pairs.

    ``httpx`` only accepts ASCII in ``str`` header values, while
    endpoints may carry any string.

    :param headers: Endpoint header mapping
    :type headers: Dict[str, str]
    :return: Raw header pairs in mapping order
    :rtype: List[Tuple[bytes, bytes]]
    """
    return [(_to_bytes(name), _to_bytes(value)) for name, value in headers.items()]


def parse_url(raw: str) -> Optional[httpx.URL]:
    """Parse a composed endpoint URL.

    The URL must be absolute and free of whitespace and control
    characters; nothing is percent-encoded on the caller's behalf.

    :param raw: URL string, typically ``endpoint.url``
    :type raw: str
    :return: Parsed URL, or None if the string is not a valid URL
    :rtype: Optional[httpx.URL]
    """
    if not raw or any(ch.isspace() or not ch.isprintable() for ch in raw):
        return None
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL:
        return None
    if not url.scheme or not url.host:
        return None
    return url


def serialize_parameters(parameters: Any) -> Optional[bytes]:
    """Serialize body parameters to JSON bytes.

    Any JSON value is accepted at the root. NaN and infinities are
    rejected since they are not valid JSON, as are trees nested too deep
    for the encoder.

    :param parameters: JSON value tree
    :return: UTF-8 encoded JSON, or None if the value is not serializable
    :rtype: Optional[bytes]
    """
    try:
        return json.dumps(parameters, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug("Parameter serialization failed: %s", e)
        return None


class NetworkService(Generic[E]):
    """Execute requests described by endpoints of type ``E``.

    The service keeps no per-request state: concurrent invocations are
    independent of each other.

    :param client: Transport to send through. When omitted the shared
        client from :func:`~endpoint_client.client_manager.get_http_client`
        is used.
    :type client: Optional[httpx.AsyncClient]
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client
        self._background: Set[asyncio.Task] = set()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return await get_http_client()

    async def request(self, endpoint: E, response_type: Type[T]) -> Result[T]:
        """Perform one round trip and decode the response.

        :param endpoint: Endpoint describing the call
        :type endpoint: E
        :param response_type: Type the JSON body is decoded into; any
            type pydantic can validate (models, dataclasses, TypedDicts,
            builtins and their generic aliases)
        :type response_type: Type[T]
        :return: Decoded value or the failure kind
        :rtype: Result[T]
        """
        url = parse_url(endpoint.url)
        if url is None:
            logger.debug("Invalid endpoint URL: %r", endpoint.url)
            return Result.failure(NetworkError.URL_ERROR)

        headers = httpx.Headers()
        content = None
        parameters = endpoint.parameters
        if parameters:
            content = serialize_parameters(parameters)
            if content is None:
                return Result.failure(NetworkError.PARAMETER_ERROR)
            headers["Content-Type"] = "application/json"
        if endpoint.headers:
            headers.update(encode_headers(endpoint.headers))

        method = endpoint.method.verb
        client = await self._get_client()
        request = client.build_request(method, url, headers=headers, content=content)

        try:
            response = await client.send(request)
        except (httpx.HTTPError, OSError) as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return Result.failure(NetworkError.DATA_ERROR)

        return self._decode(response, response_type)

    def _decode(self, response: httpx.Response, response_type: Type[T]) -> Result[T]:
        if not 200 <= response.status_code < 300:
            logger.debug(
                "%s %s returned status %d",
                response.request.method,
                response.request.url,
                response.status_code,
            )
            return Result.failure(NetworkError.RESPONSE_ERROR)

        data = response.content
        if not data:
            logger.debug("Empty response body from %s", response.request.url)
            return Result.failure(NetworkError.DATA_ERROR)
        if data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8):]

        try:
            payload = parse_json(data)
        except ValueError as e:
            logger.debug("Response body is not JSON: %s", e)
            return Result.failure(NetworkError.DATA_ERROR)
        logger.debug("Response payload: %s", payload)

        try:
            value = _type_adapter(response_type).validate_json(data, strict=True)
        except ValidationError as e:
            logger.debug(
                "Could not decode response into %s: %s",
                getattr(response_type, "__name__", response_type),
                e,
            )
            return Result.failure(NetworkError.DECODING_ERROR)
        return Result.success(value)

    def fetch_request(
        self,
        endpoint: E,
        response_type: Type[T],
        completion: Callable[[Result[T]], None],
    ) -> asyncio.Task:
        """Schedule a request and report its result through a callback.

        Must be called from within a running event loop. Returns as soon
        as the request is scheduled; ``completion`` is invoked exactly
        once, on the loop, with the result.

        :param endpoint: Endpoint describing the call
        :type endpoint: E
        :param response_type: Type the JSON body is decoded into
        :type response_type: Type[T]
        :param completion: Callback receiving the result
        :type completion: Callable[[Result[T]], None]
        :return: Task running the request; awaiting it is optional
        :rtype: asyncio.Task
        :raises RuntimeError: If no event loop is running
        """
        loop = asyncio.get_running_loop()

        async def run() -> None:
            result = await self.request(endpoint, response_type)
            completion(result)

        task = loop.create_task(run())
        # The loop only keeps weak references to tasks.
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task
