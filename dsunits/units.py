#
# Data Size Units of Measurement
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum, unique
from typing import Any, TYPE_CHECKING

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

if TYPE_CHECKING:
    from .datasize import DataSize


# Classes --------------------------------------------------------------------------------------------------------------

class UnrecognizedUnitError(ValueError):
    """
    Raised when a value does not name one of the 14 data size units.

    Attributes:
        value: The offending input, unchanged.
    """

    def __init__(self, value: Any, message: str | None = None):
        self.value = value
        super().__init__(message or f"Unrecognized data size unit: {value!r}")


@unique
class Unit(StrEnum):
    """
    Orders of magnitude of data, from bit and byte to exabit and exabyte.

    Kilobits and other *bit units are multiples of 1000 of the next smaller unit,
    a megabit is 1,000,000 bits.

    Kilobytes and other *byte units are multiples of 1024 of the next smaller unit,
    a megabyte is 1,048,576 bytes.

    Member values are the JEDEC long names, so ``Unit("megabyte") is Unit.MEGABYTE``.
    """
    BIT = "bit"
    BYTE = "byte"
    KILOBIT = "kilobit"
    KILOBYTE = "kilobyte"
    MEGABIT = "megabit"
    MEGABYTE = "megabyte"
    GIGABIT = "gigabit"
    GIGABYTE = "gigabyte"
    TERABIT = "terabit"
    TERABYTE = "terabyte"
    PETABIT = "petabit"
    PETABYTE = "petabyte"
    EXABIT = "exabit"
    EXABYTE = "exabyte"

    @property
    def bits(self) -> int:
        """Exact number of bits in one of this unit, from 1 (bit) to 2**63 (exabyte)."""
        return _BITS[self]

    @property
    def is_multiple_of_bits(self) -> bool:
        """True for bit, kilobit, ... exabit; False for byte, kilobyte, ... exabyte."""
        return self in _BIT_UNITS

    @property
    def order(self) -> int:
        """Order of magnitude within the unit family: 0 for bit and byte, 6 for exabit and exabyte."""
        family = _BIT_UNITS if self.is_multiple_of_bits else _BYTE_UNITS
        return family.index(self)

    def to_abbreviation(self, iec: bool = False) -> str:
        """
        Short name of this unit (1-3 characters), such as ``MB``.

        Args:
            iec: True to return the IEC abbreviation of byte multiples (KiB, MiB...),
                 False to return the JEDEC one (KB, MB...). Bit units have a single form.
        """
        jedec, iec_abbr = _ABBREVIATIONS[self]
        return iec_abbr if iec else jedec

    def to_name(self, iec: bool = False) -> str:
        """
        Long name of this unit, such as ``megabyte``.

        Args:
            iec: True to return the IEC name of byte multiples (kibibyte, mebibyte...),
                 False to return the JEDEC one (kilobyte, megabyte...).
        """
        return _IEC_NAMES.get(self, self.value) if iec else self.value

    def quantity(self, quantity: int | float) -> "DataSize":
        """
        Create a DataSize holding the given quantity of this unit.

        Examples:
            >>> Unit.MEGABYTE.quantity(1.5)
            DataSize(quantity=1.5, unit=<Unit.MEGABYTE: 'megabyte'>)
        """
        from .datasize import DataSize
        return DataSize(quantity, self)


# @formatter:off

_BYTE_UNITS = (
    Unit.BYTE, Unit.KILOBYTE, Unit.MEGABYTE, Unit.GIGABYTE,
    Unit.TERABYTE, Unit.PETABYTE, Unit.EXABYTE,
)

_BIT_UNITS = (
    Unit.BIT, Unit.KILOBIT, Unit.MEGABIT, Unit.GIGABIT,
    Unit.TERABIT, Unit.PETABIT, Unit.EXABIT,
)

MAX_ORDER = len(_BYTE_UNITS) - 1

_BITS = frozendict({
    **{unit: 8 * 1024 ** order for order, unit in enumerate(_BYTE_UNITS)},
    **{unit: 1000 ** order for order, unit in enumerate(_BIT_UNITS)},
})

# unit: (JEDEC, IEC)
_ABBREVIATIONS = frozendict({
    Unit.BYTE:     ("B", "B"),
    Unit.KILOBYTE: ("KB", "KiB"),
    Unit.MEGABYTE: ("MB", "MiB"),
    Unit.GIGABYTE: ("GB", "GiB"),
    Unit.TERABYTE: ("TB", "TiB"),
    Unit.PETABYTE: ("PB", "PiB"),
    Unit.EXABYTE:  ("EB", "EiB"),
    Unit.BIT:      ("b", "b"),
    Unit.KILOBIT:  ("kb", "kb"),
    Unit.MEGABIT:  ("mb", "mb"),
    Unit.GIGABIT:  ("gb", "gb"),
    Unit.TERABIT:  ("tb", "tb"),
    Unit.PETABIT:  ("pb", "pb"),
    Unit.EXABIT:   ("eb", "eb"),
})

_IEC_NAMES = frozendict({
    Unit.KILOBYTE: "kibibyte",
    Unit.MEGABYTE: "mebibyte",
    Unit.GIGABYTE: "gibibyte",
    Unit.TERABYTE: "tebibyte",
    Unit.PETABYTE: "pebibyte",
    Unit.EXABYTE:  "exbibyte",
})

# Long names and spelled-out aliases, matched case-insensitively
_LONG_NAMES = frozendict({
    "byte": Unit.BYTE,
    "kilobyte": Unit.KILOBYTE, "kbyte": Unit.KILOBYTE, "kib": Unit.KILOBYTE, "kibibyte": Unit.KILOBYTE,
    "megabyte": Unit.MEGABYTE, "mbyte": Unit.MEGABYTE, "mib": Unit.MEGABYTE, "mebibyte": Unit.MEGABYTE,
    "gigabyte": Unit.GIGABYTE, "gbyte": Unit.GIGABYTE, "gib": Unit.GIGABYTE, "gibibyte": Unit.GIGABYTE,
    "terabyte": Unit.TERABYTE, "tbyte": Unit.TERABYTE, "tib": Unit.TERABYTE, "tebibyte": Unit.TERABYTE,
    "petabyte": Unit.PETABYTE, "pbyte": Unit.PETABYTE, "pib": Unit.PETABYTE, "pebibyte": Unit.PETABYTE,
    "exabyte":  Unit.EXABYTE,  "ebyte": Unit.EXABYTE,  "eib": Unit.EXABYTE,  "exbibyte": Unit.EXABYTE,
    "bit": Unit.BIT,
    "kilobit": Unit.KILOBIT, "kbit": Unit.KILOBIT,
    "megabit": Unit.MEGABIT, "mbit": Unit.MEGABIT,
    "gigabit": Unit.GIGABIT, "gbit": Unit.GIGABIT,
    "terabit": Unit.TERABIT, "tbit": Unit.TERABIT,
    "petabit": Unit.PETABIT, "pbit": Unit.PETABIT,
    "exabit":  Unit.EXABIT,  "ebit": Unit.EXABIT,
})

# Abbreviations, matched case-sensitively: upper case means bytes, lower case means bits
_ABBREVIATION_UNITS = frozendict({
    "B": Unit.BYTE,
    "kB": Unit.KILOBYTE, "KB": Unit.KILOBYTE, "K": Unit.KILOBYTE,
    "MB": Unit.MEGABYTE, "M": Unit.MEGABYTE,
    "GB": Unit.GIGABYTE, "G": Unit.GIGABYTE,
    "TB": Unit.TERABYTE, "T": Unit.TERABYTE,
    "PB": Unit.PETABYTE, "P": Unit.PETABYTE,
    "EB": Unit.EXABYTE,  "E": Unit.EXABYTE,
    "b": Unit.BIT,
    "kb": Unit.KILOBIT, "Kb": Unit.KILOBIT, "k": Unit.KILOBIT,
    "mb": Unit.MEGABIT, "Mb": Unit.MEGABIT, "m": Unit.MEGABIT,
    "gb": Unit.GIGABIT, "Gb": Unit.GIGABIT, "g": Unit.GIGABIT,
    "tb": Unit.TERABIT, "Tb": Unit.TERABIT, "t": Unit.TERABIT,
    "pb": Unit.PETABIT, "Pb": Unit.PETABIT, "p": Unit.PETABIT,
    "eb": Unit.EXABIT,  "Eb": Unit.EXABIT,  "e": Unit.EXABIT,
})

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def as_unit(value: Any) -> Unit:
    """
    Return value as a Unit member.

    Unit members pass through, strings are resolved with parse_unit().

    Raises:
        UnrecognizedUnitError: for anything else, including out-of-range integers.
    """
    if isinstance(value, Unit):
        return value
    if isinstance(value, str):
        return parse_unit(value)
    raise UnrecognizedUnitError(value)


def parse_unit(unit_name_or_abbreviation: str) -> Unit:
    """
    Get a data size unit from its name or abbreviation.

    Supports units of bits and bytes, including JEDEC units like kilobytes and IEC units
    like kibibytes, as well as their abbreviations.

    Long names are case-insensitive, such as ``megabyte`` or ``MiB``. Abbreviations are
    case-sensitive, ``mb`` is megabits and ``MB`` is megabytes.

    All inputs parsed as ``Unit.MEGABYTE``: ``M``, ``MB``, ``megabyte``, ``mbyte``, ``mib``
    and ``mebibyte`` (the first two case-sensitive).

    Raises:
        UnrecognizedUnitError: if the input matches no unit name or abbreviation.

    Examples:
        >>> parse_unit("mb")
        <Unit.MEGABIT: 'megabit'>
        >>> parse_unit("MB")
        <Unit.MEGABYTE: 'megabyte'>
        >>> parse_unit("Kibibyte")
        <Unit.KILOBYTE: 'kilobyte'>
    """
    if not isinstance(unit_name_or_abbreviation, str):
        raise UnrecognizedUnitError(unit_name_or_abbreviation)

    unit = _LONG_NAMES.get(unit_name_or_abbreviation.lower())
    if unit is not None:
        return unit

    unit = _ABBREVIATION_UNITS.get(unit_name_or_abbreviation)
    if unit is not None:
        return unit

    raise UnrecognizedUnitError(
        unit_name_or_abbreviation,
        f"Unrecognized abbreviation for data size unit {unit_name_or_abbreviation!r}"
    )


def unit_for_magnitude(order: int, use_bits: bool = False) -> Unit:
    """
    Unit at the given order of magnitude within the bit or byte family.

    Orders below 0 clamp to bit/byte, orders above 6 clamp to exabit/exabyte.

    Examples:
        >>> unit_for_magnitude(2)
        <Unit.MEGABYTE: 'megabyte'>
        >>> unit_for_magnitude(9, use_bits=True)
        <Unit.EXABIT: 'exabit'>
    """
    family = _BIT_UNITS if use_bits else _BYTE_UNITS
    return family[min(max(int(order), 0), MAX_ORDER)]


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Every lookup table must cover the whole enumeration.
if not (set(_BITS) == set(_ABBREVIATIONS) == set(Unit) == set(_BYTE_UNITS + _BIT_UNITS)):
    raise AssertionError("Configuration Error: data size unit tables must cover every Unit member.")
