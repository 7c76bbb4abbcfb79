from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

# Format labels reported in BarcodeValidationResult.format
EAN_13 = "EAN-13"
EAN_8 = "EAN-8"
UPC_A = "UPC-A"
UPC_E = "UPC-E"
ISBN_10 = "ISBN-10"
ISBN_13 = "ISBN-13"
UNKNOWN = "Unknown"

_MIN_LENGTH = 6
_MAX_LENGTH = 14

_STRIP_CHARS = re.compile(r"[\s-]")
_ALLOWED_CHARS = re.compile(r"^[\dXx]+$", re.ASCII)
_ALL_DIGITS = re.compile(r"^\d+$", re.ASCII)

# Checked in this order; the first match wins.
_EAN13 = re.compile(r"^\d{13}$", re.ASCII)
_EAN8 = re.compile(r"^\d{8}$", re.ASCII)
_UPCA = re.compile(r"^\d{12}$", re.ASCII)
_ISBN13 = re.compile(r"^97[89]\d{10}$", re.ASCII)
_ISBN10 = re.compile(r"^\d{9}[\dXx]$", re.ASCII)
_UPCE = re.compile(r"^\d{6,8}$", re.ASCII)
_LOOKS_LIKE = re.compile(r"^\d{6,14}$", re.ASCII)


@dataclass(frozen=True)
class BarcodeValidationResult:
    is_valid: bool
    format: str | None = None
    error: str | None = None
    normalized_barcode: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def clean_barcode(raw: str | None) -> str:
    """Trim the input and drop internal spaces and hyphens."""
    if not raw:
        return ""
    return _STRIP_CHARS.sub("", raw.strip())


def _weighted_check_digit(digits: list[int], even_weight: int, odd_weight: int) -> int:
    total = sum(d * (even_weight if i % 2 == 0 else odd_weight) for i, d in enumerate(digits))
    return (10 - (total % 10)) % 10


def ean13_checksum_ok(barcode: str) -> bool:
    """Mod-10 check over the first 12 digits, weights 1/3 starting at index 0."""
    digits = [int(c) for c in barcode]
    return _weighted_check_digit(digits[:12], 1, 3) == digits[12]


def upca_checksum_ok(barcode: str) -> bool:
    """Mod-10 check over the first 11 digits, weights 3/1 starting at index 0."""
    digits = [int(c) for c in barcode]
    return _weighted_check_digit(digits[:11], 3, 1) == digits[11]


def _invalid(error: str, barcode_format: str | None = None) -> BarcodeValidationResult:
    return BarcodeValidationResult(is_valid=False, format=barcode_format, error=error)


def validate_barcode(raw: str | None) -> BarcodeValidationResult:
    """Classify a scanned or typed code and verify its check digit where the
    format has one.

    Never raises for bad input; the failure reason is carried in ``error``.
    """
    cleaned = clean_barcode(raw)

    if not cleaned:
        return _invalid("Barcode cannot be empty")
    if len(cleaned) < _MIN_LENGTH:
        return _invalid("Barcode is too short. Must be at least 6 digits.")
    if len(cleaned) > _MAX_LENGTH:
        return _invalid("Barcode is too long. Must be 14 digits or less.")
    if not _ALLOWED_CHARS.match(cleaned):
        return _invalid("Barcode can only contain digits (and X for ISBN-10).")

    if _EAN13.match(cleaned):
        barcode_format = EAN_13
        if not ean13_checksum_ok(cleaned):
            logger.debug("EAN-13 checksum mismatch for %s", cleaned)
            return _invalid("Invalid EAN-13 checksum. Please check the barcode.", barcode_format)
    elif _EAN8.match(cleaned):
        barcode_format = EAN_8
    elif _UPCA.match(cleaned):
        barcode_format = UPC_A
        if not upca_checksum_ok(cleaned):
            logger.debug("UPC-A checksum mismatch for %s", cleaned)
            return _invalid("Invalid UPC-A checksum. Please check the barcode.", barcode_format)
    elif _ISBN13.match(cleaned):
        # Dead branch: every 13-digit code is already taken by EAN-13 above.
        # Kept so the classification order stays stable.
        barcode_format = ISBN_13
    elif _ISBN10.match(cleaned):
        barcode_format = ISBN_10
    elif _UPCE.match(cleaned):
        # Only 6-7 digits reach here; 8 digits are EAN-8.
        barcode_format = UPC_E
    elif _ALL_DIGITS.match(cleaned):
        # Generic numeric code, accepted without a checksum.
        barcode_format = UNKNOWN
    else:
        return _invalid("Unrecognized barcode format.")

    return BarcodeValidationResult(
        is_valid=True,
        format=barcode_format,
        normalized_barcode=cleaned.upper(),
    )


def looks_like_barcode(value: str | None) -> bool:
    """Cheap pre-filter: 6-14 digits once spaces and hyphens are removed."""
    return bool(_LOOKS_LIKE.match(clean_barcode(value)))
