import pytest

from testbridge import bootstrap


@pytest.fixture(scope="session", autouse=True)
def setup_testbridge() -> None:
    """Bootstrap plugins once for the entire test session."""

    bootstrap()
