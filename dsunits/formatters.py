"""
Format-string templates for data sizes.

A template is an optional unit token followed by optional precision digits:

    ""          auto-normalize to the best fit byte unit, default precision
    "A", "A2"   auto-normalize to the best fit byte unit (KB, MB...)
    "a", "a2"   auto-normalize to the best fit bit unit (kb, mb...)
    "1"         auto-normalize, 1 digit after the decimal point
    "K0", "KB0", "kilobyte0", "kib0"
                convert to kilobytes, no fractional digits
    "mb1", "Mb1", "m1", "megabit1"
                convert to megabits, 1 fractional digit

Unit tokens are resolved with parse_unit(): abbreviations are case-sensitive
("MB" is megabytes, "mb" is megabits), long names are not.

Formatting runs as a two-step pipeline: parse_template() and coerce_data_size()
decide whether a value/template pair belongs to the data size grammar, then
either render() produces the data size string or fallback() hands the value to
its own default formatting. DataSizeFormatter wires the pipeline into
string.Formatter so data size fields can share a format string with any other
field.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
import string
from dataclasses import dataclass
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .datasize import DataSize
from .numeric import DEFAULT_NUMBER_FORMAT, NumericFormatter, std_numeric
from .units import Unit, UnrecognizedUnitError, parse_unit

_TEMPLATE = re.compile(r"(?P<unit>.*?)(?P<precision>[0-9]*)", re.DOTALL)

_AUTO_BYTES = "A"
_AUTO_BITS = "a"


# Classes --------------------------------------------------------------------------------------------------------------

class DataSizeFormatError(ValueError):
    """Raised when a value cannot be rendered with the requested template."""


@dataclass(frozen=True)
class FormatRequest:
    """
    Parsed data size template.

    Attributes:
        unit: Explicit unit to convert to, None when normalizing.
        precision: Digits after the decimal point, None for the number format default.
        normalize: True to choose the best fit unit automatically.
        use_bits: Normalize among bit units instead of byte units, only used when normalize is True.
    """
    unit: Unit | None = None
    precision: int | None = None
    normalize: bool = True
    use_bits: bool = False


class DataSizeFormatter(string.Formatter):
    """
    String formatter that renders DataSize fields, and optionally numeric byte counts,
    with data size templates.

    Fields whose value or format spec fall outside the data size grammar are rendered
    with their default formatting, so dates, percentages and arbitrary objects can be
    mixed with data sizes in one format string.

    Args:
        number_format: Number rendering conventions, defaults to NumberFormat().
        format_numbers: True to render int, float and other numeric arguments as byte
                        counts, False to apply templates to DataSize arguments only.

    Examples:
        >>> DataSizeFormatter().format("{0:A1} copied", 1474560)
        '1.4 MB copied'
        >>> DataSizeFormatter(format_numbers=False).format("{0:.1%}", 1.0)
        '100.0%'
    """

    def __init__(self, number_format: NumericFormatter | None = None, format_numbers: bool = True):
        super().__init__()
        self.number_format = number_format or DEFAULT_NUMBER_FORMAT
        self.format_numbers = format_numbers

    def format_field(self, value: Any, format_spec: str) -> str:
        request = parse_template(format_spec)
        try:
            size = coerce_data_size(value, self.format_numbers) if request is not None else None
        except OverflowError as e:
            raise DataSizeFormatError(
                f"Cannot format {type(value).__name__} value as a data size, out of float range: {e}"
            ) from e

        if size is not None:
            return render(size, request, self.number_format)

        if isinstance(value, DataSize):
            raise DataSizeFormatError(f"Invalid data size template {format_spec!r}")

        return fallback(value, format_spec)


# Methods --------------------------------------------------------------------------------------------------------------

def coerce_data_size(value: Any, format_numbers: bool = True) -> DataSize | None:
    """
    Interpret value as a DataSize if possible.

    DataSize values pass through. Numeric values (but never bool) become a count of
    bytes when format_numbers is True. Returns None for everything else.
    """
    if isinstance(value, DataSize):
        return value
    if not format_numbers:
        return None

    quantity = std_numeric(value, on_error="none")
    if quantity is None:
        return None
    return DataSize(quantity, Unit.BYTE)


def fallback(value: Any, format_spec: str | None) -> str:
    """
    Default formatting for values outside the data size grammar.

    None renders as an empty string. Objects which implement __format__ are rendered
    with the builtin format(), all others with str().

    Raises:
        DataSizeFormatError: if the value's own formatting or string conversion fails.
    """
    if value is None:
        return ""

    format_spec = format_spec or ""
    try:
        if type(value).__format__ is object.__format__:
            return str(value)
        return format(value, format_spec)
    except Exception as e:
        raise DataSizeFormatError(
            f"Cannot format {type(value).__name__} value with format spec {format_spec!r}: {e}"
        ) from e


def format_size(value: Any,
                template: str | None = None,
                number_format: NumericFormatter | None = None) -> str:
    """
    Format a DataSize or a numeric count of bytes with a data size template.

    Args:
        value: DataSize, or a number of bytes. Other values get their default formatting.
        template: Data size template such as "A2" or "KB0". None or "" auto-normalizes.
        number_format: Number rendering conventions, defaults to NumberFormat().

    Raises:
        DataSizeFormatError: if value is a DataSize and template is not a data size
                             template, if value is a number too large for a float,
                             or if the default formatting of value fails.

    Examples:
        >>> format_size(1024, "A")
        '1.00 KB'
        >>> format_size(1000, "a")
        '8.00 kb'
        >>> format_size(9_995_326_316_544, "PB0")
        '0 PB'
        >>> format_size(DataSize(1474560), "KB1", NumberFormat(".", ","))
        '1.440,0 KB'
    """
    return DataSizeFormatter(number_format).format_field(value, template or "")


def parse_template(template: str | None) -> FormatRequest | None:
    """
    Parse a data size template into a FormatRequest.

    Returns None if the template does not belong to the data size grammar, e.g. a date
    format like "%Y-%m-%d" or a float spec like ".1%".

    Examples:
        >>> parse_template("A2")
        FormatRequest(unit=None, precision=2, normalize=True, use_bits=False)
        >>> parse_template("mb")
        FormatRequest(unit=<Unit.MEGABIT: 'megabit'>, precision=None, normalize=False, use_bits=False)
        >>> parse_template("%H:%M") is None
        True
    """
    if template is None:
        template = ""
    if not isinstance(template, str):
        return None

    match = _TEMPLATE.fullmatch(template)
    unit_token, digits = match["unit"], match["precision"]
    precision = int(digits) if digits else None

    if unit_token in ("", _AUTO_BYTES):
        return FormatRequest(precision=precision, normalize=True, use_bits=False)
    if unit_token == _AUTO_BITS:
        return FormatRequest(precision=precision, normalize=True, use_bits=True)

    try:
        unit = parse_unit(unit_token)
    except UnrecognizedUnitError:
        return None
    return FormatRequest(unit=unit, precision=precision, normalize=False)


def render(size: DataSize,
           request: FormatRequest,
           number_format: NumericFormatter | None = None) -> str:
    """
    Convert or normalize size as requested and render it with its JEDEC abbreviation.

    Example:
        >>> render(DataSize(-1024), FormatRequest(unit=Unit.KILOBYTE, precision=0, normalize=False))
        '-1 KB'
    """
    if request.normalize:
        size = size.normalize(request.use_bits)
    else:
        size = size.convert_to_unit(request.unit)
    return size.to_string(request.precision, number_format=number_format)
