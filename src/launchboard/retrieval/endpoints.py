"""SpaceX API endpoint descriptors."""

from enum import Enum
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import requests

JSON_HEADERS = {"Content-Type": "application/json"}


class SpaceXEndpoint(Enum):
    """Logical resources of the SpaceX API, each mapped to a path under one origin."""

    LAUNCHES = "/v4/launches"
    INFO = "/v4/company"

    @property
    def base(self) -> str:
        return "https://api.spacexdata.com"

    @property
    def path(self) -> str:
        return self.value

    def url(self, base: Optional[str] = None) -> str:
        """
        Build the absolute URL for this endpoint.

        The endpoint path replaces whatever path, query or fragment the
        origin carries, so "https://host/api?x=1" still yields "https://host/v4/...".

        Raises:
            ValueError: If base is not an absolute http(s) origin
        """
        parts = urlsplit(base or self.base)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Invalid API base URL: {base!r}")
        return urlunsplit((parts.scheme, parts.netloc, self.path, "", ""))

    def request(self, base: Optional[str] = None) -> requests.Request:
        """GET request for this endpoint with a JSON content type and no body."""
        return requests.Request("GET", self.url(base), headers=dict(JSON_HEADERS))
