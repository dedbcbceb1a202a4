"""Shared fixtures."""
import pytest

from tests.upstream import FakeUpstream


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()
