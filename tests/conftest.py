"""Test configuration and fixtures."""

import itertools
from typing import Callable

import pytest

from scribe.config import RegistrationSettings


@pytest.fixture
def registration_settings() -> RegistrationSettings:
    """Default registration settings."""
    return RegistrationSettings()


@pytest.fixture
def sequential_suffixes() -> Callable[[int], str]:
    """Deterministic suffix factory producing "0001", "0002", ..."""
    counter = itertools.count(1)

    def _suffix(length: int) -> str:
        return str(next(counter)).zfill(length)[-length:]

    return _suffix
