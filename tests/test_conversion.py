import pytest

from fxwidget.core.errors import InvalidAmount, RateNotFound, UnsupportedCurrency
from fxwidget.models.constants import DECIMAL_PLACES
from fxwidget.services.conversion import convert, parse_amount
from fxwidget.services.money import format_amount, round_to
from fxwidget.services.rate_table import RateTable


def test_jpy_to_eur_rounds_to_four_places(table):
    result = convert(1, "JPY", "EUR", table)
    assert result.rate == 0.00553
    assert result.value == 0.0055


def test_eur_to_jpy_rounds_to_two_places(table):
    result = convert(1000, "EUR", "JPY", table)
    assert result.rate == 180.699
    assert result.value == 180699.0


@pytest.mark.parametrize(
    "amount, src, dst, expected",
    [
        (100, "JPY", "KRW", 935.0),
        (10, "GBP", "EUR", 11.3557),
        (10000, "KRW", "EUR", 5.9),
        (3, "GBP", "JPY", 615.6),
    ],
)
def test_distinct_pairs(table, amount, src, dst, expected):
    result = convert(amount, src, dst, table)
    assert result.rate == table.lookup(src, dst)
    assert result.value == expected


@pytest.mark.parametrize("code", ["JPY", "KRW", "EUR", "GBP"])
def test_identity_uses_rate_one_and_target_rounding(table, code):
    result = convert(1234.56789, code, code, table)
    assert result.rate == 1.0
    assert result.value == round_to(1234.56789, DECIMAL_PLACES[code])


def test_identity_does_not_consult_lookup():
    class NoLookup:
        def supports(self, code):
            return True

        def lookup(self, from_code, to_code):
            raise AssertionError("lookup must not be called")

    assert convert(5, "EUR", "EUR", NoLookup()).value == 5.0


def test_result_carries_normalized_codes(table):
    result = convert("2", " jpy", "gbp ", table)
    assert (result.from_code, result.to_code) == ("JPY", "GBP")
    assert result.source_amount == 2.0


def test_missing_pair_propagates_rate_not_found():
    partial = RateTable({("JPY", "EUR"): 0.00553})
    with pytest.raises(RateNotFound):
        convert(1, "EUR", "JPY", partial)


def test_unknown_code(table):
    with pytest.raises(UnsupportedCurrency):
        convert(1, "USD", "JPY", table)


@pytest.mark.parametrize("raw", [0, -3, "0", "-1.5", "abc", "", "   ", None, True, "nan", "inf"])
def test_invalid_amounts(table, raw):
    with pytest.raises(InvalidAmount):
        convert(raw, "JPY", "EUR", table)


@pytest.mark.parametrize(
    "raw, expected",
    [(" 12.5 ", 12.5), ("1,000", 1000.0), ("1e3", 1000.0), (7, 7.0), (0.01, 0.01)],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_invalid_amount_is_a_value_error():
    with pytest.raises(ValueError):
        parse_amount("twelve")


@pytest.mark.parametrize(
    "value, places, expected",
    [(2.5, 0, 3.0), (0.125, 2, 0.13), (-2.5, 0, -3.0), (0.00553, 4, 0.0055), (1.005, 2, 1.0), (-1.005, 2, -1.0)],
)
def test_round_half_away_from_zero(value, places, expected):
    assert round_to(value, places) == expected


def test_format_amount():
    assert format_amount(180699.0, 2) == "180,699"
    assert format_amount(0.0055, 4) == "0.0055"
    assert format_amount(1234.5) == "1,234.5"


@pytest.mark.parametrize(
    "amount, src, dst, expected",
    [
        # scale, round, unscale on the raw float product
        (0.3, "JPY", "KRW", 2.81),
        (0.9, "JPY", "KRW", 8.41),
        (1.005, "JPY", "JPY", 1.0),
    ],
)
def test_rounding_scales_the_raw_float(table, amount, src, dst, expected):
    assert convert(amount, src, dst, table).value == expected
