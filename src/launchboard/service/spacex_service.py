"""Typed access to the SpaceX launch list and company info."""

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import List, Optional

from launchboard.models.company import CompanyInfo
from launchboard.models.launch import LaunchRecord
from launchboard.retrieval.endpoints import SpaceXEndpoint
from launchboard.retrieval.session import HttpSession, check_retries


class SpaceXServiceProtocol(ABC):
    """Services the view-model needs from the SpaceX API."""

    @abstractmethod
    def fetch_launches(self) -> "Future[List[LaunchRecord]]":
        pass

    @abstractmethod
    def fetch_info(self) -> "Future[CompanyInfo]":
        pass


class SpaceXService(SpaceXServiceProtocol):
    """
    Binds a session to the launches and company endpoints.

    Failures are forwarded as the session raised them; this class never
    translates or wraps errors.
    """

    def __init__(self, session: HttpSession, *, base_url: Optional[str] = None, retries: int = 0):
        check_retries(retries)
        self.session = session
        self.base_url = base_url
        self.retries = retries

    def fetch_launches(self) -> "Future[List[LaunchRecord]]":
        request = SpaceXEndpoint.LAUNCHES.request(self.base_url)
        return self.session.execute(request, List[LaunchRecord], retries=self.retries)

    def fetch_info(self) -> "Future[CompanyInfo]":
        request = SpaceXEndpoint.INFO.request(self.base_url)
        return self.session.execute(request, CompanyInfo, retries=self.retries)
