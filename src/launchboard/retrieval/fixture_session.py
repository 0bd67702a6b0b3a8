"""Session substitute that decodes fixed payloads instead of touching the network."""

from concurrent.futures import Future
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import requests

from launchboard.retrieval.endpoints import SpaceXEndpoint
from launchboard.retrieval.errors import NetworkError, TransportFailure
from launchboard.retrieval.session import HttpSession, check_retries, decode_payload
from launchboard.utils.logging import get_logger

logger = get_logger(__name__)

FIXTURE_FILES: Dict[str, str] = {
    SpaceXEndpoint.LAUNCHES.path: "launches.json",
    SpaceXEndpoint.INFO.path: "company.json",
}


class FixtureSession(HttpSession):
    """
    Returns already-completed futures holding decoded fixture data.

    Either one payload is served for every request, or payloads are read per
    endpoint from a directory holding launches.json and company.json.
    Retries are accepted and ignored: a fixture never changes between attempts.
    """

    def __init__(self, payload: Optional[bytes] = None, *, fixtures_dir: Optional[Path] = None):
        if (payload is None) == (fixtures_dir is None):
            raise ValueError("Provide exactly one of payload or fixtures_dir")
        self.payload = payload
        self.fixtures_dir = fixtures_dir
        self.requests: List[requests.Request] = []

    def _load(self, request: requests.Request) -> bytes:
        if self.payload is not None:
            return self.payload

        path = urlsplit(request.url).path
        filename = FIXTURE_FILES.get(path)
        if filename is None:
            raise TransportFailure(f"No fixture registered for {path}")
        fixture_path = self.fixtures_dir / filename
        if not fixture_path.exists():
            raise TransportFailure(f"Fixture file not found: {fixture_path}")
        return fixture_path.read_bytes()

    def execute(self, request: requests.Request, decoding_type: Any, retries: int = 0) -> "Future[Any]":
        check_retries(retries)
        self.requests.append(request)

        future: "Future[Any]" = Future()
        try:
            future.set_result(decode_payload(self._load(request), decoding_type))
        except NetworkError as e:
            logger.debug(f"Fixture request for {request.url} failed: {e}")
            future.set_exception(e)
        return future
