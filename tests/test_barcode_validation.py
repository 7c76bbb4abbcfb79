import pytest

from ingredient_decoder.barcodes.validation import (
    EAN_8,
    EAN_13,
    ISBN_10,
    UNKNOWN,
    UPC_A,
    UPC_E,
    clean_barcode,
    ean13_checksum_ok,
    looks_like_barcode,
    upca_checksum_ok,
    validate_barcode,
)


def test_valid_ean13():
    result = validate_barcode("4006381333931")
    assert result.is_valid
    assert result.format == EAN_13
    assert result.error is None
    assert result.normalized_barcode == "4006381333931"


def test_ean13_checksum_failure_reports_format():
    result = validate_barcode("4006381333932")
    assert not result.is_valid
    assert result.format == EAN_13
    assert "checksum" in result.error
    assert result.normalized_barcode is None


def test_valid_upca():
    result = validate_barcode("036000291452")
    assert result.is_valid
    assert result.format == UPC_A


def test_upca_checksum_failure_reports_format():
    result = validate_barcode("036000291453")
    assert not result.is_valid
    assert result.format == UPC_A
    assert "UPC-A checksum" in result.error


def test_isbn13_prefix_is_still_classified_as_ean13():
    assert validate_barcode("9780306406157").format == EAN_13

    bad = validate_barcode("9780306406158")
    assert not bad.is_valid
    assert bad.format == EAN_13


def test_eight_digits_is_ean8_without_checksum():
    result = validate_barcode("12345678")
    assert result.is_valid
    assert result.format == EAN_8


@pytest.mark.parametrize("raw", ["123456", "1234567"])
def test_six_and_seven_digits_are_upce(raw):
    result = validate_barcode(raw)
    assert result.is_valid
    assert result.format == UPC_E


def test_isbn10_with_trailing_x_is_uppercased():
    result = validate_barcode("030640615x")
    assert result.is_valid
    assert result.format == ISBN_10
    assert result.normalized_barcode == "030640615X"


def test_ten_digit_code_is_isbn10():
    assert validate_barcode("0306406152").format == ISBN_10


@pytest.mark.parametrize("raw", ["123456789", "12345678901", "12345678901234"])
def test_other_numeric_lengths_are_unknown_but_valid(raw):
    result = validate_barcode(raw)
    assert result.is_valid
    assert result.format == UNKNOWN


def test_spaces_and_hyphens_are_removed():
    result = validate_barcode("  4006-3813 33931 ")
    assert result.is_valid
    assert result.normalized_barcode == "4006381333931"


@pytest.mark.parametrize("raw", ["", "   ", " - - ", None])
def test_empty(raw):
    result = validate_barcode(raw)
    assert not result.is_valid
    assert result.error == "Barcode cannot be empty"
    assert result.format is None


def test_too_short():
    result = validate_barcode("123")
    assert not result.is_valid
    assert "too short" in result.error


def test_length_is_checked_before_characters():
    assert "too short" in validate_barcode("abc").error


def test_too_long():
    result = validate_barcode("12345678901234567")
    assert not result.is_valid
    assert "too long" in result.error


def test_invalid_characters():
    result = validate_barcode("12AB5678")
    assert not result.is_valid
    assert result.error == "Barcode can only contain digits (and X for ISBN-10)."


@pytest.mark.parametrize("raw", ["12345X789", "12345678X0", "X234567890123"])
def test_misplaced_x_is_unrecognized(raw):
    result = validate_barcode(raw)
    assert not result.is_valid
    assert result.error == "Unrecognized barcode format."
    assert result.format is None


def test_checksum_helpers():
    assert ean13_checksum_ok("4006381333931")
    assert not ean13_checksum_ok("4006381333930")
    assert upca_checksum_ok("036000291452")
    assert not upca_checksum_ok("036000291450")


def test_clean_barcode():
    assert clean_barcode(" 12 34-56 ") == "123456"
    assert clean_barcode(None) == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("123456", True),
        ("12345678901234", True),
        ("4006381333932", True),
        ("4006 3813-33931", True),
        ("12345", False),
        ("123456789012345", False),
        ("030640615X", False),
        ("sugar, salt", False),
        ("", False),
    ],
)
def test_looks_like_barcode(value, expected):
    assert looks_like_barcode(value) is expected


def test_result_serialises():
    assert validate_barcode("123").to_dict() == {
        "is_valid": False,
        "format": None,
        "error": "Barcode is too short. Must be at least 6 digits.",
        "normalized_barcode": None,
    }
