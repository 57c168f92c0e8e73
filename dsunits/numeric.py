"""
Numeric coercion and locale-style number rendering for data size quantities.

std_numeric() normalizes numbers from the stdlib and third-party libraries into
plain int or float. NumberFormat is the injectable number formatting capability
used to render quantities with thousands separators and a fixed precision.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import locale
import operator
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Literal, Protocol, Self, runtime_checkable


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class NumericFormatter(Protocol):
    """Protocol for the number formatting capability injected into data size rendering."""

    def format_number(self, value: float, precision: int | None = None) -> str: ...


@dataclass(frozen=True)
class NumberFormat:
    """
    Number rendering conventions: thousands separator, digit grouping, decimal point and default precision.

    The default instance renders like the en-US culture: ``1,474,560.00``.

    Attributes:
        thousands_sep: Group separator inserted between integer digit groups; may be empty.
        decimal_point: Separator between the integer and fractional digits.
        precision: Default number of fractional digits, used when format_number()
                   is called with precision=None.
        grouping: Integer digit group sizes from the right, in the locale.localeconv() form:
                  a trailing 0 repeats the previous size, locale.CHAR_MAX stops grouping,
                  and an empty sequence disables grouping. (3, 0) groups by thousands,
                  (3, 2, 0) renders 12345678 as ``1,23,45,678``.

    Example:
        >>> NumberFormat(thousands_sep=".", decimal_point=",").format_number(1440, 1)
        '1.440,0'

    Raises:
        ValueError: If precision is negative, decimal_point is empty, the separators are
                    equal, or grouping is malformed.
    """
    thousands_sep: str = ","
    decimal_point: str = "."
    precision: int = 2
    grouping: tuple[int, ...] = (3, 0)

    def __post_init__(self):
        """Validate fields"""
        if not isinstance(self.precision, int) or isinstance(self.precision, bool) or self.precision < 0:
            raise ValueError(f"precision must be a non-negative int, got {self.precision!r}")
        if not isinstance(self.decimal_point, str) or not self.decimal_point:
            raise ValueError(f"decimal_point must be a non-empty str, got {self.decimal_point!r}")
        if not isinstance(self.thousands_sep, str):
            raise ValueError(f"thousands_sep must be a str, got {self.thousands_sep!r}")
        if self.thousands_sep == self.decimal_point:
            raise ValueError(f"thousands_sep and decimal_point must differ, both are {self.decimal_point!r}")

        if isinstance(self.grouping, (str, bytes)) or not isinstance(self.grouping, Iterable):
            raise ValueError(f"grouping must be a sequence of int, got {self.grouping!r}")
        grouping = tuple(self.grouping)
        if not all(isinstance(size, int) and not isinstance(size, bool) and size >= 0 for size in grouping):
            raise ValueError(f"grouping sizes must be non-negative int, got {self.grouping!r}")
        if grouping[:1] == (0,):
            raise ValueError(f"grouping cannot start with 0, got {self.grouping!r}")
        object.__setattr__(self, 'grouping', grouping)

    @classmethod
    def from_locale(cls, precision: int = 2) -> Self:
        """
        Number format of the current process locale, as reported by locale.localeconv().

        The locale itself is not changed; call locale.setlocale() beforehand if needed.
        """
        conv = locale.localeconv()
        return cls(
            thousands_sep=conv.get("thousands_sep") or "",
            decimal_point=conv.get("decimal_point") or ".",
            precision=precision,
            grouping=tuple(conv.get("grouping") or ()),
        )

    def merge(self,
              thousands_sep: str | None = None,
              decimal_point: str | None = None,
              precision: int | None = None,
              grouping: Iterable[int] | None = None,
              ) -> Self:
        """
        Create a new NumberFormat with the given fields overridden.

        Parameters left as None are inherited from the current instance.
        """
        return type(self)(
            thousands_sep=self.thousands_sep if thousands_sep is None else thousands_sep,
            decimal_point=self.decimal_point if decimal_point is None else decimal_point,
            precision=self.precision if precision is None else precision,
            grouping=self.grouping if grouping is None else grouping,
        )

    def format_number(self, value: float, precision: int | None = None) -> str:
        """
        Render value with grouped integer digits and a fixed number of fractional digits.

        Args:
            value: Number to render, sign is kept.
            precision: Fractional digits, overrides the instance default when not None.

        Examples:
            >>> NumberFormat().format_number(9761060856.0, 0)
            '9,761,060,856'
            >>> NumberFormat().format_number(-0.5)
            '-0.50'
            >>> NumberFormat(grouping=(3, 2, 0)).format_number(12345678)
            '1,23,45,678.00'
        """
        precision = self.precision if precision is None else precision
        if not isinstance(precision, int) or isinstance(precision, bool) or precision < 0:
            raise ValueError(f"precision must be a non-negative int, got {precision!r}")

        text = f"{value:.{precision}f}"
        sign, digits = ("-", text[1:]) if text.startswith("-") else ("", text)
        integer, _, fraction = digits.partition(".")

        if self.thousands_sep and integer.isdigit():
            integer = self.thousands_sep.join(_group_digits(integer, self.grouping))
        if fraction:
            return f"{sign}{integer}{self.decimal_point}{fraction}"
        return f"{sign}{integer}"


DEFAULT_NUMBER_FORMAT = NumberFormat()


# Methods --------------------------------------------------------------------------------------------------------------

def std_numeric(
        value,
        *,
        on_error: Literal["raise", "none"] = "raise",
        allow_bool: bool = False
) -> int | float | None:
    """
    Convert numeric types to standard Python int, float, or None.

    Normalizes Decimal, Fraction and third-party scalars (NumPy, PyTorch...) into plain
    Python numbers so they can be used as data quantities.

    Args:
        value: Numeric value. Supports int/float/None, Decimal, Fraction and types
               implementing __index__, .item() or __float__.
        on_error: "raise" to raise TypeError for unsupported types (default),
                  "none" to return None instead.
        allow_bool: If True, convert bool to int. If False, treat bool as a type error,
                    bool is a subclass of int but never a meaningful quantity.

    Returns:
        int for Python ints, __index__ types and integer-valued Decimal/Fraction;
        float for everything else numeric, including inf and nan; None for None input
        or for type errors when on_error="none".

    Raises:
        TypeError: When on_error="raise" and value is not numeric.

    Examples:
        >>> std_numeric(42)
        42
        >>> from decimal import Decimal
        >>> std_numeric(Decimal("42.0"))
        42
        >>> std_numeric("42", on_error="none") is None
        True
    """
    if value is None:
        return None

    if isinstance(value, bool):
        if allow_bool:
            return int(value)
        return _type_error(f"boolean values not supported, got {value}", on_error)

    # Fast path
    if isinstance(value, (int, float)):
        return value

    # Strings implement neither protocol below but fail early for a clearer message
    if isinstance(value, (str, bytes)):
        return _type_error(f"unsupported numeric type: {type(value).__name__}", on_error)

    # Priority 1: exact integers, NumPy integer scalars implement __index__
    if hasattr(value, "__index__"):
        try:
            return operator.index(value)
        except (TypeError, ValueError) as e:
            return _type_error(f"cannot convert {type(value).__name__} to int via __index__: {e}", on_error)

    # Priority 2: array and tensor scalars
    item = getattr(value, "item", None)
    if callable(item):
        try:
            result = item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, bool):
            return std_numeric(result, on_error=on_error, allow_bool=allow_bool)
        if isinstance(result, (int, float)):
            return result

    # Priority 3: integer-valued Decimal/Fraction keep exact int
    if type(value).__name__ in ("Decimal", "Fraction"):
        try:
            as_int = int(value)
            if value == as_int:
                return as_int
        except (TypeError, ValueError, OverflowError):
            pass

    # Priority 4: duck typing via __float__
    if hasattr(value, "__float__"):
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            return _type_error(f"cannot convert {type(value).__name__} to float: {e}", on_error)

    return _type_error(
        f"unsupported numeric type: {type(value).__name__}. "
        f"Expected int, float, None, or types implementing __index__, __float__ or .item()",
        on_error
    )


# Private Methods ------------------------------------------------------------------------------------------------------

def _type_error(message: str, on_error: str) -> None:
    if on_error == "raise":
        raise TypeError(message)
    return None


def _group_digits(digits: str, grouping: tuple[int, ...]) -> list[str]:
    """Split a string of integer digits into groups, leftmost group first."""
    groups = []
    for size in _grouping_sizes(grouping):
        if len(digits) <= size:
            break
        groups.append(digits[-size:])
        digits = digits[:-size]
    groups.append(digits)
    return groups[::-1]


def _grouping_sizes(grouping: tuple[int, ...]) -> Iterator[int]:
    """Group sizes from the right, expanding a trailing 0 into an endless repeat."""
    last = None
    for size in grouping:
        if size == locale.CHAR_MAX:
            return
        if size == 0:
            while True:
                yield last
        yield size
        last = size
