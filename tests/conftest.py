# tests/conftest.py
import pytest

from jsonparsec.Parser import Cursor


@pytest.fixture
def cursor():
    def _make(input_data, offset=0):
        return Cursor(input_data, offset)

    return _make
