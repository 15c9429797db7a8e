"""Helpers shared by the wide integer tests."""

from __future__ import annotations

from typing import Type

from wide_uint import U128, U192, U256, U320, ExtendedUint
from wide_uint.constants import LIMB_BITS, LIMB_MASK

ALL_WIDTH_TYPES: tuple[Type[ExtendedUint], ...] = (U128, U192, U256, U320)
"""The named widths every generic test runs against."""


def int_to_limbs(value: int, limbs: int) -> list[int]:
    """Split a non-negative int into `limbs` little-endian 64-bit limbs."""
    return [(value >> (LIMB_BITS * i)) & LIMB_MASK for i in range(limbs)]


def from_int(width_class: Type[ExtendedUint], value: int) -> ExtendedUint:
    """Build a value of `width_class` from a plain int."""
    return width_class.from_limbs(int_to_limbs(value, width_class.LIMBS))


def max_value(width_class: Type[ExtendedUint]) -> int:
    """The largest value a width can hold."""
    return 2 ** width_class.bit_width() - 1
