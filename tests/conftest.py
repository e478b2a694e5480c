"""Shared pytest configuration and fixtures for askai tests."""

import pytest

from askai.dispatch import AsyncDispatcher
from askai.functions import AskAI
from askai.protocol import AskFormulaResponse, ErrorCode, ResponseError
from tests.helpers.recording_transport import RecordingTransport


def pytest_addoption(parser):
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Include tests marked @pytest.mark.slow (e.g. the delayed mock transport)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped unless --run-slow)")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-slow"):
        return
    skip = pytest.mark.skip(reason="slow test, pass --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def sales_grid() -> list:
    return [
        ["region", "q1", "q2"],
        ["north", 120, 135.5],
        ["south", 80, None],
        ["west", True, "n/a"],
    ]


@pytest.fixture
def ok_response() -> AskFormulaResponse:
    return AskFormulaResponse(
        error=ResponseError(code=ErrorCode.OK, message=""),
        content='[["Data","Title"],["1","2"]]',
    )


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def ask_ai(transport) -> AskAI:
    return AskAI(AsyncDispatcher(transport))
