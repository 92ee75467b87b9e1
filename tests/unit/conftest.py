import pytest

from tests.unit.mocks import mocks


@pytest.fixture(autouse=True)
def _reset_mocks() -> None:
    mocks.reset()
