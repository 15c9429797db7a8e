"""Single-Limb Primitive Tests."""

from typing import Any

import pytest

from wide_uint.constants import LIMB_MASK
from wide_uint.exceptions import LimbRangeError, WideUintTypeError, WideUintValueError
from wide_uint.limb import (
    clear_limbs,
    shift_limbs_left,
    shift_limbs_right,
    to_limb,
    to_shift,
    wrapping_add,
    wrapping_sub,
)


@pytest.mark.parametrize("value", [0, 1, 0x6F, LIMB_MASK])
def test_to_limb_accepts_in_range(value: int) -> None:
    """Tests that every value in [0, 2**64) is accepted unchanged."""
    assert to_limb(value) == value


@pytest.mark.parametrize("value", [-1, LIMB_MASK + 1, 2**200])
def test_to_limb_rejects_out_of_range(value: int) -> None:
    """Tests that values outside a limb raise LimbRangeError (a ValueError)."""
    with pytest.raises(LimbRangeError) as excinfo:
        to_limb(value)
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.max_value == LIMB_MASK


def test_limb_range_error_truncates_long_values() -> None:
    """Tests that huge offending values are shortened in the message."""
    with pytest.raises(LimbRangeError) as excinfo:
        to_limb(10**80)
    assert "..." in str(excinfo.value)
    assert excinfo.value.value == 10**80


@pytest.mark.parametrize(
    "invalid_value, expected_type_name",
    [
        (1.0, "float"),
        ("1", "str"),
        (True, "bool"),
        (None, "NoneType"),
    ],
)
def test_to_limb_rejects_non_int(invalid_value: Any, expected_type_name: str) -> None:
    """Tests that non-int scalars raise a TypeError naming the offending type."""
    with pytest.raises(TypeError, match=f"Expected int, got {expected_type_name}"):
        to_limb(invalid_value)


def test_to_shift() -> None:
    """Tests shift distance validation."""
    assert to_shift(0) == 0
    assert to_shift(1000) == 1000
    with pytest.raises(WideUintValueError):
        to_shift(-1)
    with pytest.raises(WideUintTypeError):
        to_shift(1.5)


def test_wrapping_add() -> None:
    """Tests that a limb sum wraps modulo 2**64 and reports the carry."""
    assert wrapping_add(1, 2) == (3, False)
    assert wrapping_add(LIMB_MASK, 0) == (LIMB_MASK, False)
    assert wrapping_add(LIMB_MASK, 1) == (0, True)
    assert wrapping_add(LIMB_MASK, LIMB_MASK) == (LIMB_MASK - 1, True)


def test_wrapping_sub() -> None:
    """Tests that a limb difference wraps modulo 2**64 and reports the borrow."""
    assert wrapping_sub(3, 2) == (1, False)
    assert wrapping_sub(0, 0) == (0, False)
    assert wrapping_sub(0, 1) == (LIMB_MASK, True)
    # 0x6F - 0x7A constrained to one limb leaves ...FFF5.
    assert wrapping_sub(0x6F, 0x7A) == (0xFFFF_FFFF_FFFF_FFF5, True)


def test_shift_limbs_left_carries_upward() -> None:
    """Tests that bits leaving a limb land in the next higher limb."""
    limbs = [1 << 63, 1 << 63, 0]
    shift_limbs_left(limbs, 1)
    assert limbs == [0, 1, 1]


def test_shift_limbs_left_drops_top_bits() -> None:
    """Tests that bits leaving the top limb are discarded."""
    limbs = [LIMB_MASK, LIMB_MASK]
    shift_limbs_left(limbs, 4)
    assert limbs == [LIMB_MASK - 0xF, LIMB_MASK]


def test_shift_limbs_right_carries_downward() -> None:
    """Tests that bits leaving a limb land in the next lower limb."""
    limbs = [0, 1, 1]
    shift_limbs_right(limbs, 1)
    assert limbs == [1 << 63, 1 << 63, 0]


def test_shift_limbs_right_drops_bottom_bits() -> None:
    """Tests that bits leaving limb 0 are discarded."""
    limbs = [0xFF, 0]
    shift_limbs_right(limbs, 4)
    assert limbs == [0xF, 0]


@pytest.mark.parametrize("shift", [shift_limbs_left, shift_limbs_right])
def test_shift_by_zero_is_identity(shift: Any) -> None:
    """Tests that a zero-bit shift leaves every limb unchanged."""
    limbs = [0x1234, LIMB_MASK, 7]
    shift(limbs, 0)
    assert limbs == [0x1234, LIMB_MASK, 7]


@pytest.mark.parametrize("shift", [shift_limbs_left, shift_limbs_right])
@pytest.mark.parametrize("bits", [64, 65, 128, 1000])
def test_shift_by_a_full_limb_clears(shift: Any, bits: int) -> None:
    """Tests that shifting by 64 or more zeroes everything rather than moving limbs."""
    limbs = [1, 2, 3]
    shift(limbs, bits)
    assert limbs == [0, 0, 0]


def test_clear_limbs() -> None:
    """Tests that clearing keeps the list length."""
    limbs = [5, 6]
    clear_limbs(limbs)
    assert limbs == [0, 0]
