"""Shared fixtures."""

import pytest

from pdum.compute import Compute, ComputeConfig

from .stubs import StubSession, make_response


@pytest.fixture
def session():
    return StubSession(make_response(200, {"id": "proj-1"}))


@pytest.fixture
def config():
    return ComputeConfig(max_retries=2, retry_factor=0)


@pytest.fixture
def compute(session, config):
    compute = Compute("proj-1", config=config, session=session)
    yield compute
    compute.close()
