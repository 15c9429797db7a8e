"""Exception hierarchy for wide unsigned integers."""

from __future__ import annotations

from typing import Any


class WideUintError(Exception):
    """
    Base exception for all wide integer errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class WideUintTypeError(WideUintError, TypeError):
    """Raised when an operand has a type the operation does not accept."""


class WideUintTypeDefinitionError(WideUintTypeError):
    """
    Raised when a width class is incorrectly defined.

    Attributes:
        type_name: The name of the type with the definition error.
        missing_attr: The missing or invalid attribute name.
        detail: Additional context about the error.
    """

    def __init__(
        self,
        type_name: str,
        *,
        missing_attr: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.missing_attr = missing_attr
        self.detail = detail

        if missing_attr:
            msg = f"{type_name} must define {missing_attr}"
        elif detail:
            msg = f"{type_name}: {detail}"
        else:
            msg = f"{type_name} has an invalid type definition"

        super().__init__(msg)


class WideUintValueError(WideUintError, ValueError):
    """
    Base class for value-related errors.

    Raised when a value is invalid for an operation, even if the type is correct.
    """


class LimbRangeError(WideUintValueError):
    """
    Raised when a scalar does not fit in a single limb.

    Attributes:
        value: The offending value.
        max_value: The largest value a limb can hold (inclusive).
    """

    def __init__(self, value: Any, *, max_value: int) -> None:
        self.value = value
        self.max_value = max_value

        value_repr = repr(value)
        if len(value_repr) > 50:
            value_repr = value_repr[:47] + "..."

        super().__init__(f"{value_repr} does not fit in a limb (valid range: [0, {max_value}])")


class LimbIndexError(WideUintError, IndexError):
    """
    Raised when a limb index is outside the width of the integer.

    Attributes:
        type_name: The width class being accessed.
        index: The requested limb index.
        limbs: The number of limbs the type holds.
    """

    def __init__(self, type_name: str, *, index: int, limbs: int) -> None:
        self.type_name = type_name
        self.index = index
        self.limbs = limbs

        super().__init__(f"Limb index {index} is out of range for {type_name} ({limbs} limbs)")


class CarryOverflowError(WideUintError, OverflowError):
    """
    Raised when an addition carries out of the most significant limb.

    The operand keeps every limb written before the carry escaped.

    Attributes:
        type_name: The width class that overflowed.
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"{type_name} addition overflow: carry out of the top limb")


class BorrowUnderflowError(WideUintError, ArithmeticError):
    """
    Raised when a subtraction borrows out of the most significant limb.

    The operand keeps every limb written before the borrow escaped.

    Attributes:
        type_name: The width class that underflowed.
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"{type_name} subtraction underflow: borrow out of the top limb")
