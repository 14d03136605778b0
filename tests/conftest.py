"""Pytest configuration and fixtures for chattools tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from chattools.config import FilterConfig
from chattools.logger import reset_logger


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Leave the chattools logger silent and handler-free after every test."""
    yield
    reset_logger()


@pytest.fixture
def standard() -> FilterConfig:
    """The standard preset."""
    return FilterConfig.standard()


@pytest.fixture
def legacy() -> FilterConfig:
    """The legacy preset."""
    return FilterConfig.legacy()
