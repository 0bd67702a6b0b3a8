"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from launchboard.retrieval.fixture_session import FixtureSession
from launchboard.service.spacex_service import SpaceXService
from launchboard.viewmodel.spacex_viewmodel import SpaceXViewModel

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def launches_payload() -> bytes:
    return (FIXTURES_DIR / "launches.json").read_bytes()


@pytest.fixture
def company_payload() -> bytes:
    return (FIXTURES_DIR / "company.json").read_bytes()


@pytest.fixture
def fixture_session() -> FixtureSession:
    """Session serving launches.json and company.json without network I/O."""
    return FixtureSession(fixtures_dir=FIXTURES_DIR)


@pytest.fixture
def viewmodel(fixture_session) -> SpaceXViewModel:
    return SpaceXViewModel(SpaceXService(fixture_session))


@pytest.fixture
def loaded_viewmodel(viewmodel) -> SpaceXViewModel:
    """View-model whose launch list has already been fetched from the fixture."""
    viewmodel.fetch_launches()
    return viewmodel
