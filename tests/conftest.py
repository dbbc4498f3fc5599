from pathlib import Path

import pytest

from .util import FakeHunspell

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures():
    return FIXTURES


@pytest.fixture
def aff():
    return FIXTURES / "reduced.aff"


@pytest.fixture
def dic():
    return FIXTURES / "reduced.dic"


@pytest.fixture
def extra_dic():
    return FIXTURES / "extra.dic"


@pytest.fixture
def fake_lib():
    return FakeHunspell()


@pytest.fixture(scope="session")
def native_lib():
    """The real libhunspell, or skip when it is not installed."""
    from pyhunspell._loader import load_lib

    try:
        return load_lib()
    except OSError as e:
        pytest.skip(f"libhunspell not available: {e}")
