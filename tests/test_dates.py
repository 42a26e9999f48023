import pytest

from aamvagen.dates import is_leap_year, is_valid_date, normalize_date


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("02/29/2000", True),
        ("02/29/1900", False),
        ("02/29/2024", True),
        ("02/29/2023", False),
        ("04/31/2020", False),
        ("12-31-1999", True),
        ("01/15-2023", True),
    ],
)
def test_is_valid_date_calendar_rules(value: str, expected: bool) -> None:
    assert is_valid_date(value, current_year=2026) is expected


def test_is_valid_date_rejects_malformed_input():
    assert not is_valid_date("")
    assert not is_valid_date("01/15")
    assert not is_valid_date("01/15/2023/1")
    assert not is_valid_date("13/01/2023")
    assert not is_valid_date("00/10/2023")
    assert not is_valid_date("ab/cd/efgh")
    # Arabic-Indic digits for 05/20/1990
    assert not is_valid_date("\u0660\u0665/\u0662\u0660/\u0661\u0669\u0669\u0660")


def test_is_valid_date_year_window():
    assert not is_valid_date("01/01/1899", current_year=2026)
    assert is_valid_date("01/01/1900", current_year=2026)
    assert is_valid_date("01/01/2126", current_year=2026)
    assert not is_valid_date("01/01/2127", current_year=2026)
    # two-digit years only exist for the normalizer
    assert not is_valid_date("01/01/25", current_year=2026)


def test_leap_year_rule():
    assert is_leap_year(2000)
    assert is_leap_year(2024)
    assert not is_leap_year(1900)
    assert not is_leap_year(2023)


def test_normalize_date_pads_and_expands_years():
    assert normalize_date("1/5/2023") == "01052023"
    assert normalize_date("05-20-1990") == "05201990"
    assert normalize_date("12/31/25") == "12312025"
    assert normalize_date("12/31/99") == "12312099"


def test_normalize_date_returns_empty_for_wrong_shape():
    assert normalize_date("") == ""
    assert normalize_date("05201990") == ""
    assert normalize_date("1/2/3/4") == ""


def test_normalize_date_round_trip_components():
    for month, day, year in [("01", "15", "2023"), ("12", "31", "1999"), ("02", "29", "2000")]:
        normalized = normalize_date(f"{month}/{day}/{year}")
        assert len(normalized) == 8
        assert (normalized[0:2], normalized[2:4], normalized[4:8]) == (month, day, year)


def test_padded_parts_validate_and_normalize_alike():
    assert is_valid_date(" 5/20/1990", current_year=2026)
    assert normalize_date(" 5/20/1990") == "05201990"
    assert normalize_date("05 - 20 - 90") == "05202090"
