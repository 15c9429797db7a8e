"""Fixed-width unsigned integers built from 64-bit limbs."""

from .constants import LIMB_BITS, LIMB_MASK, MAX_LIMBS
from .exceptions import (
    BorrowUnderflowError,
    CarryOverflowError,
    LimbIndexError,
    LimbRangeError,
    WideUintError,
    WideUintTypeDefinitionError,
    WideUintTypeError,
    WideUintValueError,
)
from .extended import U128, U192, U256, U320, ExtendedUint, extended_uint_type

__all__ = [
    # Core types
    "ExtendedUint",
    "U128",
    "U192",
    "U256",
    "U320",
    "extended_uint_type",
    # Constants
    "LIMB_BITS",
    "LIMB_MASK",
    "MAX_LIMBS",
    # Exceptions
    "WideUintError",
    "WideUintTypeError",
    "WideUintTypeDefinitionError",
    "WideUintValueError",
    "LimbRangeError",
    "LimbIndexError",
    "CarryOverflowError",
    "BorrowUnderflowError",
]
