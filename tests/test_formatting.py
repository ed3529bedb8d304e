import pytest

from wheel_core import format_currency, format_large_number, format_probability, format_probability_as_odds


@pytest.mark.parametrize(
    "amount, expected",
    [(0, "$0.00"), (1234.5, "$1,234.50"), (-25, "-$25.00"), (1_000_000, "$1,000,000.00")],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_probability():
    assert format_probability(0.1234) == "12.34%"
    assert format_probability(1.0) == "100.00%"
    assert format_probability(None) == "N/A"


@pytest.mark.parametrize(
    "probability, expected",
    [(0.5, "1 in 2"), (1 / 25 ** 3, "1 in 15,625"), (0, "N/A"), (None, "N/A")],
)
def test_format_probability_as_odds(probability, expected):
    assert format_probability_as_odds(probability) == expected


def test_format_large_number():
    assert format_large_number(1234567) == "1,234,567"
    assert format_large_number(2500.0) == "2,500"
    assert format_large_number(1234.5) == "1,234.5"
