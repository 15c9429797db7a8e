"""Shared fixtures for wide integer tests."""

from __future__ import annotations

from typing import Type

import pytest

from tests.wide_uint.helpers import ALL_WIDTH_TYPES
from wide_uint import ExtendedUint


@pytest.fixture(params=ALL_WIDTH_TYPES, ids=lambda cls: cls.__name__)
def width_class(request: pytest.FixtureRequest) -> Type[ExtendedUint]:
    """Each named width in turn."""
    return request.param
