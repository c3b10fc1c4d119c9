import pytest

from ratgeom.config import reset_settings
from ratgeom.precision import PiProvider


@pytest.fixture
def pi():
    return PiProvider()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    monkeypatch.delenv("RATGEOM_CONFIG", raising=False)
    reset_settings()
    yield
    reset_settings()
