"""Tests for per-field coercion of raw form input."""

from __future__ import annotations

from datetime import date

import pytest

from pricing_helper.domain.coercion import (
    InputValidationError,
    coerce_bool,
    coerce_optional_float,
    coerce_optional_int,
    coerce_optional_str,
    coerce_required_date,
    coerce_required_float,
    coerce_required_int,
    round_half_up,
)


# --- optional fields ---

@pytest.mark.parametrize("raw", ["", "   ", None])
def test_blank_optional_float_is_none(raw) -> None:
    assert coerce_optional_float(raw, "bathrooms") is None


def test_optional_float_parses_decimal_text() -> None:
    assert coerce_optional_float(" 4.8 ", "review_scores_rating") == pytest.approx(4.8)
    assert coerce_optional_float("-122.3", "longitude") == pytest.approx(-122.3)


def test_optional_int_rejects_fractional_values() -> None:
    assert coerce_optional_int("", "number_of_reviews") is None
    assert coerce_optional_int("10", "number_of_reviews") == 10
    with pytest.raises(InputValidationError):
        coerce_optional_int("10.5", "number_of_reviews")


def test_optional_str_strips_and_blanks_to_none() -> None:
    assert coerce_optional_str("  House ") == "House"
    assert coerce_optional_str("   ") is None
    assert coerce_optional_str(None) is None


# --- required fields ---

def test_required_int_blank_names_the_field() -> None:
    with pytest.raises(InputValidationError) as exc_info:
        coerce_required_int("", "accommodates", minimum=1)
    assert exc_info.value.field == "accommodates"
    assert "required" in str(exc_info.value)


def test_required_int_accepts_integral_decimal_text() -> None:
    assert coerce_required_int("2.0", "accommodates", minimum=1) == 2
    assert coerce_required_int(5, "row_index", minimum=0) == 5


@pytest.mark.parametrize("raw", ["2.5", "abc", "nan", "inf", "-1"])
def test_required_int_rejects_invalid_text(raw) -> None:
    with pytest.raises(InputValidationError):
        coerce_required_int(raw, "row_index", minimum=0)


def test_required_int_zero_passes_at_lower_bound() -> None:
    assert coerce_required_int("0", "row_index", minimum=0) == 0


def test_required_float_rejects_blank_and_text() -> None:
    assert coerce_required_float("133", "base_price") == 133.0
    with pytest.raises(InputValidationError):
        coerce_required_float("", "base_price")
    with pytest.raises(InputValidationError):
        coerce_required_float("cheap", "base_price")


@pytest.mark.parametrize("raw", ["1e400", "-1e400"])
def test_floats_beyond_double_range_are_rejected(raw) -> None:
    with pytest.raises(InputValidationError, match="out of range") as excinfo:
        coerce_required_float(raw, "base_price")
    assert excinfo.value.field == "base_price"
    with pytest.raises(InputValidationError, match="out of range"):
        coerce_optional_float(raw, "latitude")


def test_bool_is_not_a_number() -> None:
    with pytest.raises(InputValidationError):
        coerce_required_float(True, "base_price")


# --- booleans and dates ---

@pytest.mark.parametrize(
    ("raw", "expected"),
    [(True, True), (False, False), ("yes", True), ("OFF", False), ("1", True), (0, False), (None, False)],
)
def test_coerce_bool_tokens(raw, expected) -> None:
    assert coerce_bool(raw, "weekend_flag") is expected


def test_coerce_bool_rejects_unknown_token() -> None:
    with pytest.raises(InputValidationError):
        coerce_bool("maybe", "holiday_flag")


def test_required_date_parses_iso_text() -> None:
    assert coerce_required_date("2024-06-01", "start_date") == date(2024, 6, 1)
    assert coerce_required_date(date(2024, 6, 1), "start_date") == date(2024, 6, 1)


@pytest.mark.parametrize("raw", ["", "06/01/2024", "2024-13-01"])
def test_required_date_rejects_blank_and_malformed(raw) -> None:
    with pytest.raises(InputValidationError):
        coerce_required_date(raw, "start_date")


# --- rounding ---

@pytest.mark.parametrize(
    ("value", "expected"),
    [(132.7, 133), (132.5, 133), (132.4, 132), (99.0, 99)],
)
def test_round_half_up(value, expected) -> None:
    assert round_half_up(value) == expected
