"""View-model owning fetch state for launches and company info."""

from concurrent.futures import Future
from typing import Callable, List, Optional

from launchboard.models.company import CompanyInfo
from launchboard.models.launch import LaunchRecord
from launchboard.service.spacex_service import SpaceXServiceProtocol
from launchboard.state.dispatch import Dispatcher, ImmediateDispatcher
from launchboard.state.fetch_state import IDLE, LOADING, Failed, FetchState, Loaded
from launchboard.state.observable import Observable
from launchboard.utils.logging import get_logger
from launchboard.viewmodel.launch_filter import DEFAULT_FILTER, LaunchFilter, filter_launches

logger = get_logger(__name__)


class SpaceXViewModel:
    """
    Tracks asynchronous fetch state per resource and derives the visible launch list.

    launches_state and info_state are observables; each fetch publishes
    Loading synchronously, then Loaded or Failed when the service's future
    completes. Completions are routed through the dispatcher, so all writes
    happen on one delivery context. Methods must be called from that context.

    A new fetch does not cancel one already in flight. Whichever completes
    last wins.
    """

    def __init__(self, service: SpaceXServiceProtocol, *, dispatcher: Optional[Dispatcher] = None):
        self.service = service
        self.dispatcher = dispatcher or ImmediateDispatcher()
        self.launches_state: Observable[FetchState[List[LaunchRecord]]] = Observable(IDLE)
        self.info_state: Observable[FetchState[CompanyInfo]] = Observable(IDLE)
        self._filter = DEFAULT_FILTER

    @property
    def active_filter(self) -> LaunchFilter:
        return self._filter

    @property
    def launches(self) -> FetchState[List[LaunchRecord]]:
        return self.launches_state.value

    @property
    def info(self) -> FetchState[CompanyInfo]:
        return self.info_state.value

    @property
    def filtered_launches(self) -> List[LaunchRecord]:
        """Loaded launches through the active filter; empty unless loaded. Recomputed per read."""
        state = self.launches_state.value
        if not isinstance(state, Loaded):
            return []
        return filter_launches(state.value, self._filter)

    def apply_filter(self, mode: LaunchFilter) -> None:
        """Switch the active filter. Does not refetch or emit."""
        self._filter = LaunchFilter(mode)

    def fetch_launches(self) -> None:
        self._fetch(self.launches_state, self.service.fetch_launches, "launches")

    def fetch_info(self) -> None:
        self._fetch(self.info_state, self.service.fetch_info, "info")

    def _fetch(self, state: Observable, start: Callable[[], Future], resource: str) -> None:
        self.dispatcher.call(lambda: state.publish(LOADING))
        logger.debug(f"Fetching {resource}")

        try:
            future = start()
        except Exception as e:
            logger.error(f"Could not start {resource} fetch: {e}")
            failed = Failed(e)
            self.dispatcher.call(lambda: state.publish(failed))
            return

        future.add_done_callback(
            lambda done: self.dispatcher.submit(lambda: self._complete(state, done, resource))
        )

    def _complete(self, state: Observable, future: Future, resource: str) -> None:
        error = future.exception()
        if error is not None:
            logger.warning(f"Fetching {resource} failed: {error}")
            state.publish(Failed(error))
            return

        value = future.result()
        if isinstance(value, list):
            logger.info(f"Loaded {len(value)} {resource}")
        else:
            logger.info(f"Loaded {resource}")
        state.publish(Loaded(value))
