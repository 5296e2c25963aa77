"""
Comic barcode decoding.

A newsstand comic carries a 12-digit UPC-A followed by a 5-digit EAN-5
supplement:

    UPC:      N PPPPP TTTTT C   (number system, publisher, title, check)
    EAN-5:    III V P           (issue number, cover variant, printing)

Anything malformed decodes to None. Callers treat that as a user input
error, never a partial result.
"""
import re
from typing import Optional

from comicshelf.data.grades import DIRECT_EDITION_VARIANT
from comicshelf.schemas.comic import BarcodeFields


MIN_BARCODE_LENGTH = 16
UPC_LENGTH = 12
EXTENSION_LENGTH = 5
MAX_BARCODE_LENGTH = UPC_LENGTH + EXTENSION_LENGTH

_SEPARATORS = re.compile(r"[\s\-]+")
# ASCII only: str.isdigit() also accepts superscripts and other scripts
_BARCODE_DIGITS = re.compile(r"[0-9]{%d,%d}" % (MIN_BARCODE_LENGTH, MAX_BARCODE_LENGTH))


def clean_barcode(raw_code: str) -> str:
    """Remove whitespace and dashes from a hand-typed code."""
    return _SEPARATORS.sub("", raw_code)


def decode(raw_code: str, direct_edition: bool = False) -> Optional[BarcodeFields]:
    """
    Decode a UPC + EAN-5 comic barcode.

    Args:
        raw_code: Scanned or typed digits, separators allowed
        direct_edition: True when "DIRECT EDITION" is printed in the barcode
            box. Forces the variant to D0 whatever the barcode says.

    Returns:
        BarcodeFields, or None if the code is not 16-17 ASCII digits or
        not a valid issue
    """
    if not isinstance(raw_code, str):
        return None

    code = clean_barcode(raw_code)
    if not _BARCODE_DIGITS.fullmatch(code):
        return None

    upc = code[:UPC_LENGTH]
    extension = code[UPC_LENGTH:UPC_LENGTH + EXTENSION_LENGTH]

    issue_number = int(extension[0:3])
    if issue_number < 1:
        return None

    cover_variant = extension[3:4] or "A"
    if direct_edition:
        cover_variant = DIRECT_EDITION_VARIANT
    elif cover_variant == "0":
        cover_variant = "A"

    printing = int(extension[4]) if len(extension) > 4 else None

    return BarcodeFields(
        raw_code=code,
        publisher_code=upc[1:6],
        title_code=upc[6:11],
        issue_number=issue_number,
        cover_variant=cover_variant.upper(),
        printing=printing,
        is_direct_edition=direct_edition,
    )


def encode(fields: BarcodeFields, number_system: str = "7", check_digit: str = "0") -> str:
    """
    Rebuild the fixed-width digit string for decoded fields.

    Only the positions the decoder reads are meaningful; the number system
    and check digit are not kept by decode and must be supplied.
    """
    variant = "0" if fields.cover_variant in ("A", DIRECT_EDITION_VARIANT) else fields.cover_variant
    printing = "" if fields.printing is None else str(fields.printing)
    return (
        f"{number_system}{fields.publisher_code[:5]}{fields.title_code}{check_digit}"
        f"{fields.issue_number:03d}{variant}{printing}"
    )
