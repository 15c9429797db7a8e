"""
Global configuration for the wide unsigned integer library.

Settings are read once from the environment at import time.
"""

import os

_SUPPORTED_ATOMIC_FLAGS: list[str] = ["0", "1"]

_ATOMIC_FLAG = os.environ.get("WIDE_UINT_ATOMIC", "0").strip()
"""Raw value of WIDE_UINT_ATOMIC ('0' or '1'). Defaults to '0'."""

if _ATOMIC_FLAG not in _SUPPORTED_ATOMIC_FLAGS:
    raise ValueError(
        f"Invalid WIDE_UINT_ATOMIC environment variable: '{_ATOMIC_FLAG}'. "
        f"Supported values: {_SUPPORTED_ATOMIC_FLAGS}"
    )

ATOMIC_ARITHMETIC: bool = _ATOMIC_FLAG == "1"
"""
Default for `ExtendedUint.ATOMIC`.

When enabled, a compound operation that fails restores the operand to its
value before the operation instead of leaving partially updated limbs.
"""
