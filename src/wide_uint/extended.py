"""Fixed-width multi-limb unsigned integers.

An `ExtendedUint` is an unsigned integer whose width is a multiple of 64 bits.
It is stored as a fixed number of 64-bit limbs in little-endian order:
limb 0 holds the least significant 64 bits.

Concrete widths are subclasses that set `LIMBS`:

    class U256(ExtendedUint):
        LIMBS = 4

    value = U256(5)
    value *= 3
    value <<= 8

Values are mutated in place through the compound operators (`+=`, `-=`,
`*=`, `<<=`, `>>=`, `&=`, `|=`, `^=`). There are no binary operators,
comparisons, division or signed interpretation.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from functools import lru_cache
from itertools import islice
from typing import IO, Any, Callable, ClassVar, Iterable, Iterator, Sequence

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self

from .config import ATOMIC_ARITHMETIC
from .constants import LIMB_BITS, LIMB_MODULUS, MAX_LIMBS, MIN_LIMBS
from .exceptions import (
    BorrowUnderflowError,
    CarryOverflowError,
    LimbIndexError,
    WideUintError,
    WideUintTypeDefinitionError,
    WideUintTypeError,
    WideUintValueError,
)
from .limb import (
    shift_limbs_left,
    shift_limbs_right,
    to_limb,
    to_shift,
    wrapping_add,
    wrapping_sub,
)

logger = logging.getLogger(__name__)


def _validate_limb_count(type_name: str, limbs: Any) -> int:
    """Check that a limb count is an int within [MIN_LIMBS, MAX_LIMBS]."""
    if isinstance(limbs, bool) or not isinstance(limbs, int):
        raise WideUintTypeDefinitionError(
            type_name, detail=f"LIMBS must be an int, got {type(limbs).__name__}"
        )
    if not (MIN_LIMBS <= limbs <= MAX_LIMBS):
        raise WideUintTypeDefinitionError(
            type_name, detail=f"LIMBS must be in [{MIN_LIMBS}, {MAX_LIMBS}], got {limbs}"
        )
    return limbs


class ExtendedUint:
    """
    Base class for fixed-width unsigned integers made of 64-bit limbs.

    Subclasses must define:
        LIMBS: The number of 64-bit limbs (width is 64 * LIMBS bits).

    Failure semantics:
        Operations raise at the point where a carry or borrow leaves the top
        limb. By default the limbs already written stay written, so a failed
        operation leaves a partially updated value. Set `ATOMIC = True` on a
        subclass, export `WIDE_UINT_ATOMIC=1`, or wrap the work in
        `atomic()` to restore the previous value on failure instead.
    """

    LIMBS: ClassVar[int]
    """The number of limbs (fixed at the type level)."""

    ATOMIC: ClassVar[bool] = ATOMIC_ARITHMETIC
    """Whether compound operations roll back on failure."""

    __slots__ = ("_limbs",)

    _limbs: list[int]

    def __init__(self, value: int | Sequence[int] | ExtendedUint = 0) -> None:
        """
        Create a new value.

        Args:
            value: One of
                - an `int` scalar, stored in limb 0 with every other limb zeroed;
                - a list or tuple of limbs in little-endian order, zero-filled
                  when short and truncated to `LIMBS` when long;
                - another instance of this type, copied limb by limb.

        Raises:
            WideUintTypeDefinitionError: If the class does not define a valid `LIMBS`.
            WideUintTypeError: If `value` has an unsupported type.
            LimbRangeError: If a scalar or limb does not fit in 64 bits.
        """
        count = self.limb_count()
        if isinstance(value, ExtendedUint):
            self._limbs = list(self._operand_limbs(value, "copy"))
        elif isinstance(value, (list, tuple)):
            kept = [to_limb(limb) for limb in value[:count]]
            self._limbs = kept + [0] * (count - len(kept))
        else:
            self._limbs = [to_limb(value)] + [0] * (count - 1)

    @classmethod
    def from_limbs(cls, limbs: Iterable[int]) -> Self:
        """
        Build a value from little-endian limbs.

        The iterable must list the least significant limb first. Limbs past
        `LIMBS` are ignored and never consumed.
        """
        return cls(tuple(islice(limbs, cls.limb_count())))

    @classmethod
    def limb_count(cls) -> int:
        """Return `LIMBS` after checking the class defines it correctly."""
        if not hasattr(cls, "LIMBS"):
            raise WideUintTypeDefinitionError(cls.__name__, missing_attr="LIMBS")
        return _validate_limb_count(cls.__name__, cls.LIMBS)

    @classmethod
    def bit_width(cls) -> int:
        """The total number of bits (64 * LIMBS)."""
        return cls.limb_count() * LIMB_BITS

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def copy(self) -> Self:
        """Return an independent copy."""
        clone = type(self).__new__(type(self))
        clone._limbs = list(self._limbs)
        return clone

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.copy()

    def assign(self, other: ExtendedUint) -> None:
        """Overwrite every limb with the limbs of `other` (same width only)."""
        self._limbs[:] = self._operand_limbs(other, "=")

    # ------------------------------------------------------------------
    # Limb access
    # ------------------------------------------------------------------

    def at(self, index: int) -> int:
        """
        Return limb `index`.

        Raises:
            LimbIndexError: If `index` is negative or not below `LIMBS`.
        """
        return self._limbs[self._check_index(index)]

    def __getitem__(self, index: int) -> int:
        """Same as `at`; slices and negative indices are not supported."""
        return self.at(index)

    def __len__(self) -> int:
        return len(self._limbs)

    def __iter__(self) -> Iterator[int]:
        """Iterate over the limbs, least significant first."""
        return iter(tuple(self._limbs))

    @property
    def limbs(self) -> tuple[int, ...]:
        """A snapshot of the limbs in little-endian order."""
        return tuple(self._limbs)

    def __int__(self) -> int:
        """The numeric value as a plain Python `int`."""
        return sum(limb << (LIMB_BITS * i) for i, limb in enumerate(self._limbs))

    # ------------------------------------------------------------------
    # Limb-level add / subtract
    # ------------------------------------------------------------------

    def add(self, amount: int, start_limb: int = 0) -> None:
        """
        Add `amount` into limb `start_limb`, carrying into higher limbs.

        Raises:
            LimbIndexError: If `start_limb` is out of range.
            CarryOverflowError: If a carry leaves the top limb.
        """
        amount = to_limb(amount)
        index = self._check_index(start_limb)
        self._apply(self._add_at, amount, index)

    def sub(self, amount: int, start_limb: int = 0) -> None:
        """
        Subtract `amount` from limb `start_limb`, borrowing from higher limbs.

        A borrow takes 1 from the next limb; the wrapped difference stays in
        the current limb.

        Raises:
            LimbIndexError: If `start_limb` is out of range.
            BorrowUnderflowError: If a borrow leaves the top limb.
        """
        amount = to_limb(amount)
        index = self._check_index(start_limb)
        self._apply(self._sub_at, amount, index)

    def _add_at(self, amount: int, index: int) -> None:
        limbs = self._limbs
        top = len(limbs) - 1
        while True:
            limbs[index], carried = wrapping_add(limbs[index], amount)
            if not carried:
                return
            if index == top:
                logger.debug("Carry left the top limb of %s", type(self).__name__)
                raise CarryOverflowError(type(self).__name__)
            index += 1
            amount = 1

    def _sub_at(self, amount: int, index: int) -> None:
        limbs = self._limbs
        top = len(limbs) - 1
        while True:
            limbs[index], borrowed = wrapping_sub(limbs[index], amount)
            if not borrowed:
                return
            if index == top:
                logger.debug("Borrow left the top limb of %s", type(self).__name__)
                raise BorrowUnderflowError(type(self).__name__)
            index += 1
            amount = 1

    def _add_limbwise(self, amounts: Sequence[int]) -> None:
        # Lowest limb first.
        for index, amount in enumerate(amounts):
            self._add_at(amount, index)

    def _sub_limbwise(self, amounts: Sequence[int]) -> None:
        # Highest limb down to limb 1, then limb 0 last.
        for index in range(len(amounts) - 1, 0, -1):
            self._sub_at(amounts[index], index)
        self._sub_at(amounts[0], 0)

    # ------------------------------------------------------------------
    # Scalar multiplication
    # ------------------------------------------------------------------

    def multiply_full(self, num: int) -> None:
        """
        Multiply in place by a 64-bit scalar using shift-and-add.

        Raises:
            CarryOverflowError: If an intermediate sum leaves the top limb.
        """
        num = to_limb(num)
        self._apply(self._multiply, num)

    def _multiply(self, num: int) -> None:
        old = tuple(self._limbs)

        # The accumulator already counts `old` once (weight 1).
        # Cancel it when bit 0 of the multiplier is clear.
        if not num & 1:
            self._sub_limbwise(old)

        for bit in range(1, LIMB_BITS):
            if (num >> bit) & 1:
                # Bits shifted past the top limb are dropped before the add.
                shifted = list(old)
                shift_limbs_left(shifted, bit)
                self._add_limbwise(shifted)

    # ------------------------------------------------------------------
    # Shifts
    # ------------------------------------------------------------------

    def shift_left(self, bits: int) -> None:
        """
        Shift left by `bits` in place, dropping bits that leave the top limb.

        Any distance of 64 or more zeroes the whole value; whole limbs are
        never moved.
        """
        shift_limbs_left(self._limbs, to_shift(bits))

    def shift_right(self, bits: int) -> None:
        """
        Shift right by `bits` in place.

        Any distance of 64 or more zeroes the whole value.
        """
        shift_limbs_right(self._limbs, to_shift(bits))

    # ------------------------------------------------------------------
    # Increment / decrement
    # ------------------------------------------------------------------

    def increment(self) -> Self:
        """Add 1 at limb 0 and return `self`."""
        self.add(1, 0)
        return self

    def decrement(self) -> Self:
        """Subtract 1 at limb 0 and return `self`."""
        self.sub(1, 0)
        return self

    # ------------------------------------------------------------------
    # Compound operators
    # ------------------------------------------------------------------

    def __iadd__(self, other: ExtendedUint | int) -> Self:
        """Handle `+=` with a same-width value or a 64-bit scalar."""
        if isinstance(other, ExtendedUint):
            self._apply(self._add_limbwise, self._operand_limbs(other, "+="))
        else:
            self.add(other, 0)
        return self

    def __isub__(self, other: ExtendedUint | int) -> Self:
        """Handle `-=` with a same-width value or a 64-bit scalar."""
        if isinstance(other, ExtendedUint):
            self._apply(self._sub_limbwise, self._operand_limbs(other, "-="))
        else:
            self.sub(other, 0)
        return self

    def __imul__(self, other: int) -> Self:
        """Handle `*=` with a 64-bit scalar."""
        if isinstance(other, ExtendedUint):
            self._raise_type_error(other, "*=")
        self.multiply_full(other)
        return self

    def __ilshift__(self, other: int) -> Self:
        """Handle `<<=`."""
        self.shift_left(other)
        return self

    def __irshift__(self, other: int) -> Self:
        """Handle `>>=`."""
        self.shift_right(other)
        return self

    def __iand__(self, other: ExtendedUint) -> Self:
        """Handle `&=` limb by limb."""
        for i, limb in enumerate(self._operand_limbs(other, "&=")):
            self._limbs[i] &= limb
        return self

    def __ior__(self, other: ExtendedUint) -> Self:
        """Handle `|=` limb by limb."""
        for i, limb in enumerate(self._operand_limbs(other, "|=")):
            self._limbs[i] |= limb
        return self

    def __ixor__(self, other: ExtendedUint) -> Self:
        """Handle `^=` limb by limb."""
        for i, limb in enumerate(self._operand_limbs(other, "^=")):
            self._limbs[i] ^= limb
        return self

    # ------------------------------------------------------------------
    # Failure handling
    # ------------------------------------------------------------------

    @contextmanager
    def atomic(self) -> Iterator[Self]:
        """
        Restore the current limbs if a `WideUintError` escapes the block.

        The error is re-raised after the rollback:

            value = U128.from_limbs([2**64 - 1, 2**64 - 1])
            try:
                with value.atomic():
                    value += 1
            except CarryOverflowError:
                pass
            # value still holds both maxed-out limbs
        """
        snapshot = list(self._limbs)
        try:
            yield self
        except WideUintError as e:
            logger.debug("Rolling back %s after %s", type(self).__name__, type(e).__name__)
            self._limbs[:] = snapshot
            raise

    def _apply(self, operation: Callable[..., None], *args: Any) -> None:
        """Run a mutating operation, rolling back on failure when `ATOMIC` is set."""
        if self.ATOMIC:
            with self.atomic():
                operation(*args)
        else:
            operation(*args)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_index(self, index: Any) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise WideUintTypeError(f"Limb index must be an int, got {type(index).__name__}")
        if not (0 <= index < len(self._limbs)):
            raise LimbIndexError(type(self).__name__, index=index, limbs=len(self._limbs))
        return index

    def _operand_limbs(self, other: Any, op_symbol: str) -> tuple[int, ...]:
        """Snapshot the limbs of a same-width operand."""
        if not isinstance(other, type(self)):
            self._raise_type_error(other, op_symbol)
        return tuple(other._limbs)

    def _raise_type_error(self, other: Any, op_symbol: str) -> None:
        """Helper to raise a consistent TypeError."""
        raise WideUintTypeError(
            f"Unsupported operand type(s) for {op_symbol}: "
            f"'{type(self).__name__}' and '{type(other).__name__}'"
        )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def format_limbs(self) -> str:
        """Limbs in decimal, most significant first, space separated, newline terminated."""
        return " ".join(str(limb) for limb in reversed(self._limbs)) + "\n"

    def print_limbs(self, stream: IO[str] | None = None) -> None:
        """Write `format_limbs()` to `stream` (standard output by default)."""
        out = sys.stdout if stream is None else stream
        out.write(self.format_limbs())

    def __repr__(self) -> str:
        """Return the official string representation (little-endian limbs)."""
        return f"{type(self).__name__}(limbs={self._limbs!r})"

    # ------------------------------------------------------------------
    # Pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""
        count = cls.limb_count()

        def validate(value: Any) -> ExtendedUint:
            """
            Build an independent instance from an instance, a scalar or a limb list.

            Subclass instances are rebuilt as `cls`. Limb lists longer than
            `LIMBS` are rejected here rather than truncated.
            """
            if type(value) is cls:
                return value.copy()
            if isinstance(value, (list, tuple)) and len(value) > count:
                raise ValueError(f"{cls.__name__} holds at most {count} limbs, got {len(value)}")
            try:
                return cls(value)
            except (WideUintTypeError, WideUintValueError) as e:
                raise ValueError(str(e)) from e

        limb_scalar_schema = core_schema.int_schema(ge=0, lt=LIMB_MODULUS, strict=True)
        limb_list_schema = core_schema.list_schema(
            limb_scalar_schema,
            max_length=count,
        )

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.union_schema([limb_scalar_schema, limb_list_schema]),
                    core_schema.no_info_plain_validator_function(validate),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: list(instance.limbs),
                return_schema=core_schema.list_schema(core_schema.int_schema()),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """Hook into Pydantic's JSON Schema generation system."""
        json_schema = handler(schema)
        json_schema.update(format=f"uint{cls.bit_width()}")
        return json_schema


class U128(ExtendedUint):
    """A 128-bit unsigned integer (2 limbs)."""

    __slots__ = ()
    LIMBS = 2


class U192(ExtendedUint):
    """A 192-bit unsigned integer (3 limbs)."""

    __slots__ = ()
    LIMBS = 3


class U256(ExtendedUint):
    """A 256-bit unsigned integer (4 limbs)."""

    __slots__ = ()
    LIMBS = 4


class U320(ExtendedUint):
    """A 320-bit unsigned integer (5 limbs)."""

    __slots__ = ()
    LIMBS = 5


_WIDTH_ALIASES: dict[int, type[ExtendedUint]] = {
    cls.LIMBS: cls for cls in (U128, U192, U256, U320)
}


@lru_cache(maxsize=None, typed=True)
def extended_uint_type(limbs: int) -> type[ExtendedUint]:
    """
    Return the width class with `limbs` limbs.

    The named aliases are returned for 2 to 5 limbs. Other widths get a
    generated class named after its bit width (e.g. `ExtendedUint64`),
    created once and reused on later calls.

    Raises:
        WideUintTypeDefinitionError: If `limbs` is not an int in [1, 65535].
    """
    _validate_limb_count("ExtendedUint", limbs)
    if limbs in _WIDTH_ALIASES:
        return _WIDTH_ALIASES[limbs]

    name = f"ExtendedUint{limbs * LIMB_BITS}"
    return type(
        name,
        (ExtendedUint,),
        {
            "__slots__": (),
            "__module__": __name__,
            "__doc__": f"A {limbs * LIMB_BITS}-bit unsigned integer ({limbs} limbs).",
            "LIMBS": limbs,
        },
    )
