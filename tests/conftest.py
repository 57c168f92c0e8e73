#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from dsunits.numeric import NumberFormat


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def decimal_comma() -> NumberFormat:
    """Number format with dot-grouped thousands and a decimal comma, as in the 'es' culture."""
    return NumberFormat(thousands_sep=".", decimal_point=",")


@pytest.fixture
def fake_localeconv(monkeypatch):
    """Patch locale.localeconv() to report the given separators and grouping."""

    def _patch(thousands_sep: str = " ", decimal_point: str = ",", grouping: list[int] | None = None):
        conv = {
            "thousands_sep": thousands_sep,
            "decimal_point": decimal_point,
            "grouping": [3, 0] if grouping is None else grouping,
        }
        monkeypatch.setattr("locale.localeconv", lambda: conv)
        return conv

    return _patch
