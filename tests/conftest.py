"""Pytest configuration for sandbox-fs tests."""

import pytest

from tests.fakes import FakeExecutor


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()
