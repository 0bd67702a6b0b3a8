"""Tests for SpaceXViewModel fetch state, filtering and delivery."""

import threading
from concurrent.futures import Future
from datetime import datetime, timezone
from typing import List
from unittest.mock import Mock

import pytest

from launchboard.models.company import CompanyInfo
from launchboard.models.launch import LaunchRecord
from launchboard.retrieval.errors import BadResponse, DecodeFailure
from launchboard.retrieval.fixture_session import FixtureSession
from launchboard.service.spacex_service import SpaceXService, SpaceXServiceProtocol
from launchboard.state.dispatch import QueueDispatcher
from launchboard.state.fetch_state import Failed, Idle, Loaded, Loading
from launchboard.viewmodel.launch_filter import LaunchFilter
from launchboard.viewmodel.spacex_viewmodel import SpaceXViewModel

FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def _sort_key(launch: LaunchRecord) -> datetime:
    # Undated launches sort as "now", which is later than every fixture date
    return launch.date_utc or FAR_FUTURE


def _completed(value) -> Future:
    future: Future = Future()
    future.set_result(value)
    return future


def _failed(error: Exception) -> Future:
    future: Future = Future()
    future.set_exception(error)
    return future


def _record_states(observable) -> list:
    states = []
    observable.subscribe(states.append)
    return states


def test_initial_state_is_idle(viewmodel):
    assert isinstance(viewmodel.launches, Idle)
    assert isinstance(viewmodel.info, Idle)
    assert viewmodel.active_filter is LaunchFilter.ASCENDING


def test_fetch_launches_loads_fixture(loaded_viewmodel):
    state = loaded_viewmodel.launches

    assert isinstance(state, Loaded)
    assert len(state.value) == 205


def test_fetch_info_loads_company(viewmodel):
    viewmodel.fetch_info()

    state = viewmodel.info
    assert isinstance(state, Loaded)
    assert state.value.name == "SpaceX"


def test_transitions_emitted_in_order(viewmodel):
    states = _record_states(viewmodel.launches_state)

    viewmodel.fetch_launches()

    assert [type(state) for state in states] == [Idle, Loading, Loaded]


def test_loading_published_before_completion():
    pending: Future = Future()
    service = Mock(spec=SpaceXServiceProtocol)
    service.fetch_info.return_value = pending
    viewmodel = SpaceXViewModel(service)

    viewmodel.fetch_info()
    assert isinstance(viewmodel.info, Loading)

    pending.set_result(CompanyInfo(name="SpaceX"))
    assert isinstance(viewmodel.info, Loaded)


def test_bad_response_becomes_failed_state():
    error = BadResponse(500, "https://api.spacexdata.com/v4/launches")
    service = Mock(spec=SpaceXServiceProtocol)
    service.fetch_launches.return_value = _failed(error)
    viewmodel = SpaceXViewModel(service)
    states = _record_states(viewmodel.launches_state)

    viewmodel.fetch_launches()

    assert viewmodel.launches == Failed(error)
    assert not any(isinstance(state, Loaded) for state in states)
    assert viewmodel.filtered_launches == []


def test_decode_failure_becomes_failed_state(company_payload):
    viewmodel = SpaceXViewModel(SpaceXService(FixtureSession(company_payload)))

    viewmodel.fetch_launches()

    state = viewmodel.launches
    assert isinstance(state, Failed)
    assert isinstance(state.error, DecodeFailure)


def test_start_error_becomes_failed_state():
    service = Mock(spec=SpaceXServiceProtocol)
    service.fetch_info.side_effect = ValueError("Invalid API base URL: 'nope'")
    viewmodel = SpaceXViewModel(service)

    viewmodel.fetch_info()

    state = viewmodel.info
    assert isinstance(state, Failed)
    assert isinstance(state.error, ValueError)


def test_refetch_from_loaded_reenters_loading(loaded_viewmodel):
    states = _record_states(loaded_viewmodel.launches_state)

    loaded_viewmodel.fetch_launches()

    assert [type(state) for state in states] == [Loaded, Loading, Loaded]


def test_refetch_from_failed_recovers():
    service = Mock(spec=SpaceXServiceProtocol)
    service.fetch_info.side_effect = [
        _failed(BadResponse(503)),
        _completed(CompanyInfo(name="SpaceX")),
    ]
    viewmodel = SpaceXViewModel(service)

    viewmodel.fetch_info()
    assert isinstance(viewmodel.info, Failed)

    viewmodel.fetch_info()
    assert viewmodel.info == Loaded(CompanyInfo(name="SpaceX"))


def test_last_completion_wins_regardless_of_issue_order():
    first: Future = Future()
    second: Future = Future()
    service = Mock(spec=SpaceXServiceProtocol)
    service.fetch_info.side_effect = [first, second]
    viewmodel = SpaceXViewModel(service)

    viewmodel.fetch_info()
    viewmodel.fetch_info()
    second.set_result(CompanyInfo(name="second"))
    first.set_result(CompanyInfo(name="first"))

    assert viewmodel.info.value.name == "first"


@pytest.mark.parametrize("mode", list(LaunchFilter))
def test_filtered_launches_empty_unless_loaded(mode):
    pending: Future = Future()
    service = Mock(spec=SpaceXServiceProtocol)
    service.fetch_launches.side_effect = [pending, _failed(BadResponse(404))]
    viewmodel = SpaceXViewModel(service)
    viewmodel.apply_filter(mode)

    assert viewmodel.filtered_launches == []

    viewmodel.fetch_launches()
    assert isinstance(viewmodel.launches, Loading)
    assert viewmodel.filtered_launches == []

    viewmodel.fetch_launches()
    assert isinstance(viewmodel.launches, Failed)
    assert viewmodel.filtered_launches == []


def test_successful_filter(loaded_viewmodel):
    loaded_viewmodel.apply_filter(LaunchFilter.SUCCESSFUL)

    launches = loaded_viewmodel.filtered_launches

    assert len(launches) == 158
    assert all(launch.success is True for launch in launches)


def test_failed_filter(loaded_viewmodel):
    loaded_viewmodel.apply_filter(LaunchFilter.FAILED)

    launches = loaded_viewmodel.filtered_launches

    assert len(launches) == 27
    assert all(launch.success is False for launch in launches)


def test_ascending_filter(loaded_viewmodel):
    loaded_viewmodel.apply_filter(LaunchFilter.ASCENDING)

    launches = loaded_viewmodel.filtered_launches

    assert len(launches) == 205
    for earlier, later in zip(launches, launches[1:]):
        assert _sort_key(earlier) <= _sort_key(later)


def test_descending_filter(loaded_viewmodel):
    loaded_viewmodel.apply_filter(LaunchFilter.DESCENDING)

    launches = loaded_viewmodel.filtered_launches

    assert len(launches) == 205
    for later, earlier in zip(launches, launches[1:]):
        assert _sort_key(later) >= _sort_key(earlier)


@pytest.mark.parametrize("mode", list(LaunchFilter))
def test_apply_filter_is_idempotent(loaded_viewmodel, mode):
    loaded_viewmodel.apply_filter(mode)
    once = [launch.id for launch in loaded_viewmodel.filtered_launches]

    loaded_viewmodel.apply_filter(mode)
    twice = [launch.id for launch in loaded_viewmodel.filtered_launches]

    assert once == twice


def test_apply_filter_neither_refetches_nor_emits(loaded_viewmodel, fixture_session):
    states = _record_states(loaded_viewmodel.launches_state)
    requests_before = len(fixture_session.requests)

    loaded_viewmodel.apply_filter(LaunchFilter.FAILED)

    assert len(states) == 1
    assert len(fixture_session.requests) == requests_before
    assert loaded_viewmodel.active_filter is LaunchFilter.FAILED


def test_apply_filter_accepts_value_string(loaded_viewmodel):
    loaded_viewmodel.apply_filter("descending")

    assert loaded_viewmodel.active_filter is LaunchFilter.DESCENDING


def test_filtered_launches_leaves_loaded_list_untouched(loaded_viewmodel):
    original = [launch.id for launch in loaded_viewmodel.launches.value]

    loaded_viewmodel.apply_filter(LaunchFilter.DESCENDING)
    loaded_viewmodel.filtered_launches

    assert [launch.id for launch in loaded_viewmodel.launches.value] == original


def test_queue_dispatcher_defers_completion(fixture_session):
    dispatcher = QueueDispatcher()
    viewmodel = SpaceXViewModel(SpaceXService(fixture_session), dispatcher=dispatcher)

    viewmodel.fetch_launches()
    assert isinstance(viewmodel.launches, Loading)

    assert dispatcher.run_pending() == 1
    assert isinstance(viewmodel.launches, Loaded)


def test_worker_completion_delivered_on_draining_thread():
    pending: Future = Future()
    service = Mock(spec=SpaceXServiceProtocol)
    service.fetch_launches.return_value = pending
    dispatcher = QueueDispatcher()
    viewmodel = SpaceXViewModel(service, dispatcher=dispatcher)
    delivery_threads: List[threading.Thread] = []
    viewmodel.launches_state.subscribe(
        lambda state: delivery_threads.append(threading.current_thread()), replay=False
    )

    viewmodel.fetch_launches()
    worker = threading.Thread(target=pending.set_result, args=([LaunchRecord(name="Demo-2")],))
    worker.start()
    worker.join()

    assert dispatcher.run_until(lambda: isinstance(viewmodel.launches, Loaded), timeout=5)
    assert delivery_threads == [threading.current_thread(), threading.current_thread()]
