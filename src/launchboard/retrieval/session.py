"""HTTP-executing sessions with status validation, decoding and retry."""

from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from launchboard.retrieval.errors import BadResponse, DecodeFailure, NetworkError, TransportFailure
from launchboard.utils.logging import get_logger

logger = get_logger(__name__)


def decode_payload(content: bytes, decoding_type: Any) -> Any:
    """
    Decode a JSON body into decoding_type.

    Args:
        content: Raw response body
        decoding_type: Any type pydantic can validate (a model, List[Model], ...)

    Returns:
        The decoded value

    Raises:
        DecodeFailure: If the body is not JSON or does not match the shape
    """
    try:
        return TypeAdapter(decoding_type).validate_json(content)
    except ValidationError as e:
        raise DecodeFailure(
            f"Failed to decode payload as {getattr(decoding_type, '__name__', decoding_type)}: "
            f"{e.error_count()} validation error(s)"
        ) from e


def check_retries(retries: int) -> None:
    if retries < 0:
        raise ValueError(f"retries must be non-negative, got {retries}")


class HttpSession(ABC):
    """Abstract HTTP executor. The service layer depends only on this contract."""

    @abstractmethod
    def execute(self, request: requests.Request, decoding_type: Any, retries: int = 0) -> "Future[Any]":
        """
        Execute a request and decode its body.

        Args:
            request: Fully formed request descriptor
            decoding_type: Expected decoded shape
            retries: Additional attempts after the first failure (non-negative)

        Returns:
            Future resolving to the decoded value, or failing with a NetworkError

        Raises:
            ValueError: If retries is negative
        """
        pass

    def close(self) -> None:
        """Release resources held by the session. Nothing to release by default."""

    def __enter__(self) -> "HttpSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class GenericSession(HttpSession):
    """Production session backed by requests and a worker thread pool."""

    def __init__(
        self,
        http: Optional[requests.Session] = None,
        *,
        timeout_seconds: float = 30,
        user_agent: Optional[str] = None,
        max_workers: int = 4,
    ):
        """
        Initialize session.

        Args:
            http: Network client to send through. If None, a private
                requests.Session is created and closed with this session.
            timeout_seconds: Per-request transport timeout
            user_agent: Optional User-Agent header applied to every request
            max_workers: Size of the worker pool requests run on
        """
        self._owns_http = http is None
        self.http = http if http is not None else requests.Session()
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="launchboard-http")

    def execute(self, request: requests.Request, decoding_type: Any, retries: int = 0) -> "Future[Any]":
        check_retries(retries)
        return self._pool.submit(self._execute_with_retries, request, decoding_type, retries)

    def _execute_with_retries(self, request: requests.Request, decoding_type: Any, retries: int) -> Any:
        attempts = retries + 1
        last_error: Optional[NetworkError] = None

        for attempt in range(1, attempts + 1):
            try:
                return self._execute_once(request, decoding_type)
            except NetworkError as e:
                last_error = e
                if attempt < attempts:
                    logger.warning(f"Attempt {attempt}/{attempts} for {request.url} failed, retrying: {e}")

        logger.error(f"Request to {request.url} failed after {attempts} attempt(s): {last_error}")
        raise last_error

    def _execute_once(self, request: requests.Request, decoding_type: Any) -> Any:
        try:
            prepared = self.http.prepare_request(request)
            if self.user_agent:
                prepared.headers["User-Agent"] = self.user_agent
            response = self.http.send(prepared, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise TransportFailure(f"Failed to fetch {request.url}: {e}") from e

        if response.status_code != 200:
            raise BadResponse(response.status_code, request.url)

        value = decode_payload(response.content, decoding_type)
        logger.debug(f"Decoded {len(response.content or b'')} bytes from {request.url}")
        return value

    def close(self) -> None:
        """Wait for in-flight requests, then release the pool and owned client."""
        self._pool.shutdown(wait=True)
        if self._owns_http:
            self.http.close()
