"""Constants used throughout the library."""

from __future__ import annotations

from typing import Final

LIMB_BITS: Final = 64
"""The number of bits held by a single limb."""

LIMB_MODULUS: Final = 2**LIMB_BITS
"""One past the largest value a limb can hold (2**64)."""

LIMB_MASK: Final = LIMB_MODULUS - 1
"""All 64 bits set. Used to wrap limb arithmetic back into range."""

MIN_LIMBS: Final = 1
"""The smallest allowed limb count for a width."""

MAX_LIMBS: Final = 2**16 - 1
"""
The largest allowed limb count for a width.

The limb count is a 16-bit quantity, which caps the widest integer at
65535 * 64 = 4,194,240 bits.
"""
