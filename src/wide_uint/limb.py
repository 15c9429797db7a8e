"""
Single-limb primitives.

A limb is one 64-bit slice of a wide integer. Python integers are unbounded,
so every primitive here masks its result back to 64 bits and reports whether
the operation wrapped, which is how a carry or borrow is detected.

The list helpers operate on little-endian limb lists (index 0 is the least
significant limb) and mutate them in place.
"""

from __future__ import annotations

from typing import Any, MutableSequence

from .constants import LIMB_BITS, LIMB_MASK, LIMB_MODULUS
from .exceptions import LimbRangeError, WideUintTypeError, WideUintValueError


def to_limb(value: Any) -> int:
    """
    Validate that `value` fits in a single limb and return it as a plain `int`.

    Raises:
        WideUintTypeError: If `value` is not an `int` (`bool` is rejected).
        LimbRangeError: If `value` is outside [0, 2**64 - 1].
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise WideUintTypeError(f"Expected int, got {type(value).__name__}")
    if not (0 <= value < LIMB_MODULUS):
        raise LimbRangeError(value, max_value=LIMB_MASK)
    return int(value)


def to_shift(bits: Any) -> int:
    """
    Validate a shift distance.

    Any non-negative distance is accepted; distances of a full limb or more
    are handled by the caller.
    """
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise WideUintTypeError(f"Expected int shift distance, got {type(bits).__name__}")
    if bits < 0:
        raise WideUintValueError(f"Shift distance must be non-negative, got {bits}")
    return int(bits)


def wrapping_add(limb: int, amount: int) -> tuple[int, bool]:
    """Add two limbs modulo 2**64. The flag is set when the sum wrapped."""
    result = (limb + amount) & LIMB_MASK
    return result, result < limb


def wrapping_sub(limb: int, amount: int) -> tuple[int, bool]:
    """Subtract two limbs modulo 2**64. The flag is set when the difference wrapped."""
    result = (limb - amount) & LIMB_MASK
    return result, result > limb


def shift_limbs_left(limbs: MutableSequence[int], bits: int) -> None:
    """
    Shift a little-endian limb list left by `bits`, in place.

    Bits leaving a limb move into the next more significant limb. Bits leaving
    the top limb are dropped. A distance of 64 or more clears every limb
    instead of moving whole limbs.
    """
    if bits >= LIMB_BITS:
        clear_limbs(limbs)
        return

    spill = 0
    for i, limb in enumerate(limbs):
        limbs[i] = ((limb << bits) & LIMB_MASK) | spill
        # With bits == 0 this is limb >> 64, which is always 0.
        spill = limb >> (LIMB_BITS - bits)


def shift_limbs_right(limbs: MutableSequence[int], bits: int) -> None:
    """
    Shift a little-endian limb list right by `bits`, in place.

    Bits leaving a limb move into the next less significant limb. Bits leaving
    limb 0 are dropped. A distance of 64 or more clears every limb.
    """
    if bits >= LIMB_BITS:
        clear_limbs(limbs)
        return

    spill = 0
    for i in range(len(limbs) - 1, -1, -1):
        limb = limbs[i]
        limbs[i] = (limb >> bits) | spill
        spill = (limb << (LIMB_BITS - bits)) & LIMB_MASK


def clear_limbs(limbs: MutableSequence[int]) -> None:
    """Set every limb to zero."""
    for i in range(len(limbs)):
        limbs[i] = 0
