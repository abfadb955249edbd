from decimal import Decimal

import pytest

from amount_words import InvalidAmount, amount_to_words, indian_number_words


@pytest.mark.parametrize("amount, expected", [
    (0, "Zero Rupees Only"),
    (100, "One Hundred Rupees Only"),
    (101, "One Hundred One Rupees Only"),
    (999, "Nine Hundred Ninety Nine Rupees Only"),
    (12345.50, "Twelve Thousand Three Hundred Forty Five Rupees and Fifty Paise Only"),
    ("1680.00", "One Thousand Six Hundred Eighty Rupees Only"),
    (Decimal("393.33"), "Three Hundred Ninety Three Rupees and Thirty Three Paise Only"),
    (0.5, "Zero Rupees and Fifty Paise Only"),
    (100000, "One Lakh Rupees Only"),
    (10000000, "One Crore Rupees Only"),
])
def test_amount_to_words(amount, expected):
    assert amount_to_words(amount) == expected


def test_indian_grouping_with_paise():
    assert amount_to_words(1234567.89) == (
        "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Rupees "
        "and Eighty Nine Paise Only"
    )


def test_crore_and_lakh_groups():
    assert amount_to_words(123456789) == (
        "Twelve Crore Thirty Four Lakh Fifty Six Thousand Seven Hundred Eighty Nine Rupees Only"
    )


def test_paise_rounding_to_hundred_carries_into_rupees():
    assert amount_to_words(10.995) == "Eleven Rupees Only"
    assert amount_to_words("99.999") == "One Hundred Rupees Only"


def test_paise_rounds_half_up():
    assert amount_to_words("1.005") == "One Rupees and One Paise Only"
    assert amount_to_words("1.004") == "One Rupees Only"


def test_large_crore_counts_use_indian_grouping():
    assert indian_number_words(10 ** 12) == "One Lakh Crore"
    assert indian_number_words(1_500_000_000) == "One Hundred Fifty Crore"


@pytest.mark.parametrize("amount", [
    -1,
    -0.01,
    float("nan"),
    float("inf"),
    "abc",
    "",
    None,
    True,
    10 ** 15,
])
def test_invalid_amounts_are_rejected(amount):
    with pytest.raises(InvalidAmount):
        amount_to_words(amount)


def test_invalid_amount_is_a_value_error():
    with pytest.raises(ValueError):
        amount_to_words("twelve")
