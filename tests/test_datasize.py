#
# Data Size Value Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import FrozenInstanceError, asdict
from decimal import Decimal
from fractions import Fraction

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from dsunits.datasize import ZERO, DataSize
from dsunits.numeric import NumberFormat
from dsunits.units import Unit, UnrecognizedUnitError


# Tests ----------------------------------------------------------------------------------------------------------------

class TestConstruction:

    def test_zero(self):
        size = DataSize()
        assert size.quantity == 0.0
        assert size.unit is Unit.BYTE
        assert size == ZERO

    def test_bytes(self):
        size = DataSize(1024)
        assert size.quantity == 1024.0
        assert isinstance(size.quantity, float)
        assert size.unit is Unit.BYTE

    def test_from_bytes(self):
        assert DataSize.from_bytes(2048) == DataSize(2, Unit.KILOBYTE)
        with pytest.raises(TypeError):
            DataSize.from_bytes(1.5)

    @pytest.mark.parametrize("quantity, expected", [
        pytest.param(Decimal("1.5"), 1.5, id="decimal"),
        pytest.param(Fraction(3, 4), 0.75, id="fraction"),
        pytest.param(-7, -7.0, id="negative-int"),
    ])
    def test_numeric_quantity(self, quantity, expected):
        assert DataSize(quantity, Unit.MEGABYTE).quantity == expected

    @pytest.mark.parametrize("quantity", [
        pytest.param(True, id="bool"),
        pytest.param("12", id="str"),
        pytest.param(None, id="none"),
        pytest.param([1], id="list"),
    ])
    def test_non_numeric_quantity(self, quantity):
        with pytest.raises(TypeError):
            DataSize(quantity)

    def test_unit_string(self):
        assert DataSize(1, "MB").unit is Unit.MEGABYTE
        assert DataSize(1, "mb").unit is Unit.MEGABIT
        assert DataSize(1, "kibibyte").unit is Unit.KILOBYTE

    @pytest.mark.parametrize("unit", [
        pytest.param(9999, id="made-up-int"),
        pytest.param("bogus", id="unknown-string"),
        pytest.param(None, id="none"),
    ])
    def test_invalid_unit(self, unit):
        with pytest.raises(UnrecognizedUnitError):
            DataSize(1, unit)

    def test_immutable(self):
        size = DataSize(1)
        with pytest.raises(FrozenInstanceError):
            size.quantity = 2.0

    def test_fields(self):
        """External serializers see exactly the two fields."""
        assert asdict(DataSize(1024)) == {"quantity": 1024.0, "unit": Unit.BYTE}

    def test_repr(self):
        assert repr(DataSize(1.5, Unit.KILOBYTE)) == "DataSize(quantity=1.5, unit=<Unit.KILOBYTE: 'kilobyte'>)"


class TestConvertToUnit:

    @pytest.mark.parametrize("size, unit, expected", [
        pytest.param(DataSize(1024), Unit.KILOBYTE, 1.0, id="bytes-to-kilobytes"),
        pytest.param(DataSize(1, Unit.KILOBYTE), Unit.BYTE, 1024.0, id="kilobytes-to-bytes"),
        pytest.param(DataSize(1000), Unit.KILOBIT, 8.0, id="bytes-to-kilobits"),
        pytest.param(DataSize(1, Unit.MEGABIT), Unit.BYTE, 125_000.0, id="megabit-to-bytes"),
        pytest.param(DataSize(1, Unit.EXABYTE), Unit.BIT, 2.0 ** 63, id="exabyte-to-bits"),
        pytest.param(DataSize(-1024), Unit.KILOBYTE, -1.0, id="negative"),
        pytest.param(DataSize(0, Unit.TERABYTE), Unit.BIT, 0.0, id="zero"),
    ])
    def test_conversion(self, size, unit, expected):
        converted = size.convert_to_unit(unit)
        assert converted.quantity == expected
        assert converted.unit is unit

    def test_source_unchanged(self):
        size = DataSize(1024)
        size.convert_to_unit(Unit.KILOBYTE)
        assert size.unit is Unit.BYTE
        assert size.quantity == 1024.0

    def test_unit_string(self):
        assert DataSize(1024).convert_to_unit("K").unit is Unit.KILOBYTE

    def test_invalid_unit(self):
        with pytest.raises(UnrecognizedUnitError):
            DataSize(1).convert_to_unit(9999)

    @pytest.mark.parametrize("first", list(Unit))
    @pytest.mark.parametrize("second", [Unit.BIT, Unit.KILOBYTE, Unit.GIGABIT, Unit.EXABYTE])
    def test_roundtrip(self, first, second):
        """Converting through an intermediate unit lands on the direct conversion."""
        size = DataSize(123_456_789.25)
        via = size.convert_to_unit(first).convert_to_unit(second)
        direct = size.convert_to_unit(second)
        assert via.unit is direct.unit
        assert via.quantity == pytest.approx(direct.quantity, rel=1e-12)


class TestNormalize:

    @pytest.mark.parametrize("size, use_bits, expected_unit, expected_quantity", [
        pytest.param(DataSize(1024), False, Unit.KILOBYTE, 1.0, id="kilobyte"),
        pytest.param(DataSize(1023), False, Unit.BYTE, 1023.0, id="below-kilobyte"),
        pytest.param(DataSize(1474560), False, Unit.MEGABYTE, 1.40625, id="megabytes"),
        pytest.param(DataSize(1024 ** 5), False, Unit.PETABYTE, 1.0, id="petabyte"),
        pytest.param(DataSize(1024 ** 6), False, Unit.EXABYTE, 1.0, id="exabyte"),
        pytest.param(DataSize(1024 ** 7), False, Unit.EXABYTE, 1024.0, id="beyond-exabyte"),
        pytest.param(DataSize(1000), True, Unit.KILOBIT, 8.0, id="kilobits"),
        pytest.param(DataSize(125_000), True, Unit.MEGABIT, 1.0, id="megabit"),
        pytest.param(DataSize(1, Unit.EXABIT), True, Unit.EXABIT, 1.0, id="exabit"),
        pytest.param(DataSize(1, Unit.BIT), False, Unit.BYTE, 0.125, id="sub-byte"),
        pytest.param(DataSize(-1536), False, Unit.KILOBYTE, -1.5, id="negative"),
        pytest.param(DataSize(8, Unit.MEGABIT), False, Unit.KILOBYTE, 976.5625, id="bits-to-bytes"),
        pytest.param(DataSize(math.nextafter(1024.0, 0)), False, Unit.BYTE, 1024.0, id="just-below-kilobyte"),
        pytest.param(DataSize(math.nextafter(1024.0 ** 3, 0)), False, Unit.MEGABYTE, 1024.0, id="just-below-gigabyte"),
        pytest.param(DataSize(math.nextafter(1024.0 ** 6, 0)), False, Unit.PETABYTE, 1024.0, id="just-below-exabyte"),
        pytest.param(DataSize(math.nextafter(1000.0 ** 2, 0), Unit.BIT), True, Unit.KILOBIT, 1000.0,
                     id="just-below-megabit"),
        pytest.param(DataSize(math.nextafter(1000.0 ** 6, 0), Unit.BIT), True, Unit.PETABIT, 1000.0,
                     id="just-below-exabit"),
    ])
    def test_best_fit(self, size, use_bits, expected_unit, expected_quantity):
        normalized = size.normalize(use_bits)
        assert normalized.unit is expected_unit
        assert normalized.quantity == pytest.approx(expected_quantity)

    @pytest.mark.parametrize("order", range(1, 7))
    @pytest.mark.parametrize("use_bits, base_unit, step", [
        pytest.param(False, Unit.BYTE, 1024, id="bytes"),
        pytest.param(True, Unit.BIT, 1000, id="bits"),
    ])
    def test_unit_boundaries(self, order, use_bits, base_unit, step):
        """One float step either side of a unit boundary keeps the quantity at or above 1."""
        boundary = float(step ** order)
        below = DataSize(math.nextafter(boundary, 0), base_unit).normalize(use_bits)
        above = DataSize(math.nextafter(boundary, math.inf), base_unit).normalize(use_bits)
        assert below.unit.order == order - 1
        assert below.quantity >= 1
        assert above.unit.order == order
        assert above.quantity >= 1

    def test_boundary_rendering(self):
        assert format(DataSize(1073741823.999999), "A15").endswith(" MB")

    @pytest.mark.parametrize("unit", list(Unit))
    def test_zero(self, unit):
        """Zero normalizes to the base unit without evaluating log(0)."""
        assert DataSize(0, unit).normalize().unit is Unit.BYTE
        assert DataSize(0, unit).normalize(use_bits=True).unit is Unit.BIT

    def test_infinite(self):
        assert DataSize(math.inf).normalize().unit is Unit.EXABYTE
        assert DataSize(-math.inf).normalize(use_bits=True).unit is Unit.EXABIT

    def test_nan(self):
        normalized = DataSize(math.nan, Unit.GIGABYTE).normalize()
        assert normalized.unit is Unit.BYTE
        assert math.isnan(normalized.quantity)

    @pytest.mark.parametrize("quantity", [0, 1, 999, 1024, 1_048_575, 9_995_326_316_544, -5e12, 1e19])
    @pytest.mark.parametrize("use_bits", [False, True])
    def test_idempotent(self, quantity, use_bits):
        once = DataSize(quantity).normalize(use_bits)
        twice = once.normalize(use_bits)
        assert twice.unit is once.unit
        assert twice.quantity == pytest.approx(once.quantity)


class TestComparison:

    def test_equal_across_units(self):
        assert DataSize(1, Unit.KILOBYTE) == DataSize(1024, Unit.BYTE)
        assert DataSize(1, Unit.KILOBIT) == DataSize(125)
        assert DataSize(1, Unit.KILOBYTE) != DataSize(1, Unit.KILOBIT)

    def test_hash_across_units(self):
        assert hash(DataSize(1, Unit.MEGABYTE)) == hash(DataSize(1024, Unit.KILOBYTE))
        assert len({DataSize(1, Unit.MEGABYTE), DataSize(1_048_576)}) == 1

    def test_ordering(self):
        small, large = DataSize(1, Unit.MEGABIT), DataSize(1, Unit.MEGABYTE)
        assert small < large
        assert small <= large
        assert large > small
        assert large >= small
        assert DataSize(1024) <= DataSize(1, Unit.KILOBYTE)
        assert DataSize(1024) >= DataSize(1, Unit.KILOBYTE)
        assert sorted([large, small, ZERO]) == [ZERO, small, large]

    def test_other_types(self):
        assert DataSize(1024) != 1024
        with pytest.raises(TypeError):
            DataSize(1) < 2


class TestArithmetic:

    def test_add_in_left_unit(self):
        total = DataSize(1, Unit.KILOBYTE) + DataSize(512)
        assert total.unit is Unit.KILOBYTE
        assert total.quantity == 1.5

    def test_add_int_bytes(self):
        assert (DataSize(1, Unit.KILOBYTE) + 512).quantity == 1.5
        total = 512 + DataSize(1, Unit.KILOBYTE)
        assert total.unit is Unit.BYTE
        assert total.quantity == 1536.0

    def test_sum(self):
        total = sum([DataSize(1, Unit.KILOBYTE), DataSize(1, Unit.KILOBYTE)])
        assert total == DataSize(2, Unit.KILOBYTE)

    def test_subtract(self):
        diff = DataSize(1, Unit.MEGABYTE) - DataSize(512, Unit.KILOBYTE)
        assert diff.unit is Unit.MEGABYTE
        assert diff.quantity == 0.5
        assert (2048 - DataSize(1, Unit.KILOBYTE)) == DataSize(1024)

    def test_multiply(self):
        assert DataSize(1.5, Unit.GIGABIT) * 2 == DataSize(3, Unit.GIGABIT)
        assert 2 * DataSize(1.5, Unit.GIGABIT) == DataSize(3, Unit.GIGABIT)
        assert (DataSize(1, Unit.KILOBYTE) * Decimal("0.5")).quantity == 0.5

    def test_divide_by_scalar(self):
        half = DataSize(1, Unit.KILOBYTE) / 2
        assert half.unit is Unit.KILOBYTE
        assert half.quantity == 0.5

    def test_divide_by_data_size(self):
        ratio = DataSize(1, Unit.MEGABYTE) / DataSize(256, Unit.KILOBYTE)
        assert isinstance(ratio, float)
        assert ratio == 4.0

    @pytest.mark.parametrize("divisor", [
        pytest.param(0, id="int"),
        pytest.param(0.0, id="float"),
        pytest.param(DataSize(), id="zero-bytes"),
        pytest.param(DataSize(0, Unit.PETABIT), id="zero-petabits"),
    ])
    def test_divide_by_zero(self, divisor):
        with pytest.raises(ZeroDivisionError, match="Cannot divide"):
            DataSize(1, Unit.KILOBYTE) / divisor

    @pytest.mark.parametrize("expression", [
        pytest.param(lambda: DataSize(1) + 1.5, id="add-float"),
        pytest.param(lambda: DataSize(1) + "1", id="add-str"),
        pytest.param(lambda: DataSize(1) * DataSize(1), id="mul-data-size"),
        pytest.param(lambda: DataSize(1) * True, id="mul-bool"),
        pytest.param(lambda: DataSize(1) / "2", id="div-str"),
        pytest.param(lambda: 2 / DataSize(1), id="rdiv"),
    ])
    def test_unsupported_operands(self, expression):
        with pytest.raises(TypeError):
            expression()


class TestConversionToNumbers:

    @pytest.mark.parametrize("size, expected", [
        pytest.param(DataSize(1, Unit.KILOBYTE), 1024, id="kilobyte"),
        pytest.param(DataSize(1.9), 1, id="truncate"),
        pytest.param(DataSize(-1.5), -1, id="truncate-toward-zero"),
        pytest.param(DataSize(1, Unit.BIT), 0, id="single-bit"),
        pytest.param(DataSize(1, Unit.EXABYTE), 2 ** 60, id="exabyte"),
    ])
    def test_int(self, size, expected):
        assert int(size) == expected

    def test_bool(self):
        assert not DataSize()
        assert DataSize(1, Unit.BIT)


class TestToString:

    def test_str(self):
        assert str(DataSize(1474560)) == "1,474,560.00 B"

    def test_str_keeps_unit(self):
        assert str(DataSize(1536).convert_to_unit(Unit.KILOBYTE)) == "1.50 KB"

    def test_normalize_then_str(self):
        assert str(DataSize(1474560).normalize()) == "1.41 MB"

    def test_to_string_normalize(self, decimal_comma):
        assert DataSize(1474560).to_string(2, normalize=True) == "1.41 MB"
        assert DataSize(1474560).to_string(2, normalize=True, number_format=decimal_comma) == "1,41 MB"

    def test_to_string_normalize_keeps_family(self):
        assert DataSize(8000, Unit.BIT).to_string(1, normalize=True) == "8.0 kb"

    def test_to_string_in(self):
        assert DataSize(1474560).to_string_in(Unit.KILOBYTE, 2) == "1,440.00 KB"
        assert DataSize(1474560).to_string_in("MiB", 0) == "1 MB"

    def test_default_precision_from_number_format(self):
        assert DataSize(1024).to_string(number_format=NumberFormat(precision=3)) == "1,024.000 B"

    def test_format_method(self, decimal_comma):
        assert DataSize(1474560).format("KB1") == "1,440.0 KB"
        assert DataSize(1474560).format("KB1", decimal_comma) == "1.440,0 KB"
        assert DataSize(1474560).format() == "1.41 MB"

    def test_dunder_format(self):
        assert f"{DataSize(1024):A}" == "1.00 KB"
        assert f"{DataSize(1474560):K1}" == "1,440.0 KB"
        assert format(DataSize(0, Unit.KILOBYTE), "A1") == "0.0 B"
