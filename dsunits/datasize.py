#
# Data Size Value
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from dataclasses import dataclass
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import DEFAULT_NUMBER_FORMAT, NumericFormatter, std_numeric
from .units import MAX_ORDER, Unit, as_unit, unit_for_magnitude


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class DataSize:
    """
    An amount of digital data: a quantity of a data size Unit.

    Instances are immutable, every conversion and arithmetic operation returns a new
    instance. Equality, hashing and ordering compare the amount of data in bits, so
    the unit an amount is expressed in does not matter.

    Attributes:
        quantity: How much of the given unit to represent, always stored as float.
        unit: Unit of measure of the quantity. Unit names and abbreviations are
              accepted and resolved with parse_unit().

    Examples:
        >>> DataSize()                       # 0 bytes
        >>> DataSize(1024)                   # 1024 bytes
        >>> DataSize(1, Unit.KILOBYTE) == DataSize(1024)
        True
        >>> str(DataSize(1536).convert_to_unit(Unit.KILOBYTE))
        '1.50 KB'
        >>> f"{DataSize(9_995_326_316_544):A1}"
        '9.1 TB'
    """
    quantity: float = 0.0
    unit: Unit = Unit.BYTE

    def __post_init__(self):
        quantity = std_numeric(self.quantity)
        if quantity is None:
            raise TypeError("quantity must be a number, got None")
        object.__setattr__(self, 'quantity', float(quantity))
        object.__setattr__(self, 'unit', as_unit(self.unit))

    @classmethod
    def from_bytes(cls, count: int) -> Self:
        """Create an instance holding an integer count of bytes."""
        return cls(operator.index(count), Unit.BYTE)

    @property
    def bits(self) -> float:
        """Bit-equivalent quantity, the common basis for conversion and comparison."""
        return self.quantity * self.unit.bits

    def convert_to_unit(self, destination: Unit | str) -> Self:
        """
        Convert the data size to the given unit.

        Raises:
            UnrecognizedUnitError: if destination is not a Unit or a unit name.

        Example:
            >>> DataSize(1024).convert_to_unit(Unit.KILOBYTE)
            DataSize(quantity=1.0, unit=<Unit.KILOBYTE: 'kilobyte'>)
        """
        destination = as_unit(destination)
        return type(self)(self.bits / destination.bits, destination)

    def normalize(self, use_bits: bool = False) -> Self:
        """
        Convert the data size to the best fit unit.

        The best fit is the largest unit of the family that represents the amount as a
        number with magnitude greater than or equal to one. Amounts smaller than one bit
        or byte, zero included, stay in bits or bytes; the sign is kept.

        Args:
            use_bits: True to choose among bits, kilobits, megabits...
                      False to choose among bytes, kilobytes, megabytes...

        Example:
            >>> DataSize(1474560).normalize().to_string()
            '1.41 MB'
        """
        base = self.convert_to_unit(Unit.BIT if use_bits else Unit.BYTE)
        order = _order_of_magnitude(base.quantity, use_bits)
        return self.convert_to_unit(unit_for_magnitude(order, use_bits))

    # String conversion ------------------------------------------------

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, template: str) -> str:
        from .formatters import format_size
        return format_size(self, template)

    def format(self, template: str | None = None, number_format: NumericFormatter | None = None) -> str:
        """
        Format with a template such as ``A2``, ``K0`` or ``megabyte1``.

        See formatters.parse_template() for the template grammar.

        Raises:
            DataSizeFormatError: if template is not a data size template.
        """
        from .formatters import format_size
        return format_size(self, template, number_format)

    def to_string(self,
                  precision: int | None = None,
                  normalize: bool = False,
                  number_format: NumericFormatter | None = None) -> str:
        """
        Quantity rendered by the number format, a space, and the JEDEC unit abbreviation.

        Args:
            precision: Digits after the decimal point, None for the number format default.
            normalize: True to normalize first, within the family of the current unit.
            number_format: Number rendering conventions, defaults to NumberFormat().

        Examples:
            >>> DataSize(1474560).to_string()
            '1,474,560.00 B'
            >>> DataSize(1474560).to_string(2, normalize=True)
            '1.41 MB'
        """
        number_format = number_format or DEFAULT_NUMBER_FORMAT
        size = self.normalize(self.unit.is_multiple_of_bits) if normalize else self
        return f"{number_format.format_number(size.quantity, precision)} {size.unit.to_abbreviation()}"

    def to_string_in(self,
                     unit: Unit | str,
                     precision: int | None = None,
                     number_format: NumericFormatter | None = None) -> str:
        """
        Convert to the given unit and render as in to_string().

        Example:
            >>> DataSize(1474560).to_string_in(Unit.KILOBYTE, 2)
            '1,440.00 KB'
        """
        return self.convert_to_unit(unit).to_string(precision, number_format=number_format)

    # Comparison -------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, DataSize):
            return self.bits == other.bits
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.bits)

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, DataSize):
            return self.bits < other.bits
        return NotImplemented

    def __le__(self, other: Any) -> bool:
        if isinstance(other, DataSize):
            return self.bits <= other.bits
        return NotImplemented

    def __gt__(self, other: Any) -> bool:
        if isinstance(other, DataSize):
            return self.bits > other.bits
        return NotImplemented

    def __ge__(self, other: Any) -> bool:
        if isinstance(other, DataSize):
            return self.bits >= other.bits
        return NotImplemented

    # Arithmetic, results are in the unit of the left operand ----------

    def __add__(self, other: Any) -> Self:
        other = _as_data_size(other)
        if other is None:
            return NotImplemented
        return type(self)(self.quantity + other.convert_to_unit(self.unit).quantity, self.unit)

    def __radd__(self, other: Any) -> Self:
        left = _as_data_size(other)
        if left is None:
            return NotImplemented
        return left + self

    def __sub__(self, other: Any) -> Self:
        other = _as_data_size(other)
        if other is None:
            return NotImplemented
        return type(self)(self.quantity - other.convert_to_unit(self.unit).quantity, self.unit)

    def __rsub__(self, other: Any) -> Self:
        left = _as_data_size(other)
        if left is None:
            return NotImplemented
        return left - self

    def __mul__(self, other: Any) -> Self:
        factor = _as_scalar(other)
        if factor is None:
            return NotImplemented
        return type(self)(self.quantity * factor, self.unit)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Self | float:
        """
        Divide by a number, giving a DataSize, or by a DataSize, giving a plain ratio.

        Raises:
            ZeroDivisionError: if the divisor is zero, or a zero amount of data.
        """
        if isinstance(other, DataSize):
            if other.bits == 0:
                raise ZeroDivisionError(f"Cannot divide {self} by zero")
            return self.bits / other.bits

        divisor = _as_scalar(other)
        if divisor is None:
            return NotImplemented
        if divisor == 0:
            raise ZeroDivisionError(f"Cannot divide {self} by zero")
        return type(self)(self.quantity / divisor, self.unit)

    # Conversion to numbers --------------------------------------------

    def __int__(self) -> int:
        """Number of whole bytes, truncated toward zero."""
        bits = int(self.bits)
        return bits // 8 if bits >= 0 else -(-bits // 8)

    def __bool__(self) -> bool:
        return self.quantity != 0


ZERO = DataSize()


# Private Methods ------------------------------------------------------------------------------------------------------

def _as_data_size(value: Any) -> DataSize | None:
    """DataSize operands pass through, plain ints are byte counts; None for anything else."""
    if isinstance(value, DataSize):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return DataSize.from_bytes(value)
    return None


def _as_scalar(value: Any) -> int | float | None:
    if isinstance(value, DataSize):
        return None
    return std_numeric(value, on_error="none")


def _order_of_magnitude(value: float, use_bits: bool) -> int:
    """
    Order of magnitude of value in steps of 1000 (bits) or 1024 (bytes), within [0, MAX_ORDER].

    The log estimate is checked against the exact integer unit sizes, so value expressed
    in the unit at the returned order is at least 1 whenever the order is above 0.
    """
    magnitude = abs(value)
    if math.isnan(magnitude) or magnitude < 1:
        return 0
    if math.isinf(magnitude):
        return MAX_ORDER
    order = math.log10(magnitude) / 3 if use_bits else math.log2(magnitude) / 10
    order = min(math.floor(order), MAX_ORDER)

    bits = magnitude * unit_for_magnitude(0, use_bits).bits
    while order > 0 and bits < unit_for_magnitude(order, use_bits).bits:
        order -= 1
    while order < MAX_ORDER and bits >= unit_for_magnitude(order + 1, use_bits).bits:
        order += 1
    return order
