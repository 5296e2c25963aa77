"""
Unit tests for comic barcode decoding.
"""
import pytest

from comicshelf.services.ingestion.barcode_parser import decode, encode


# Marvel UPC 7 59606 07339 9 + EAN-5 001 0 1 (issue 1, variant 0, first printing)
MARVEL_CODE = "759606073399" + "00101"


class TestDecode:
    """Tests for splitting UPC + EAN-5 into barcode fields."""

    def test_decodes_fixed_width_fields(self):
        """Publisher, title, issue and printing come from fixed positions."""
        fields = decode(MARVEL_CODE)

        assert fields.publisher_code == "59606"
        assert fields.title_code == "07339"
        assert fields.issue_number == 1
        assert fields.printing == 1
        assert fields.raw_code == MARVEL_CODE

    def test_zero_variant_normalizes_to_a(self):
        """Variant digit 0 should read as cover A."""
        assert decode(MARVEL_CODE).cover_variant == "A"

    def test_direct_edition_forces_d0(self):
        """The direct edition hint should set the D0 variant."""
        fields = decode(MARVEL_CODE, direct_edition=True)
        assert fields.cover_variant == "D0"
        assert fields.is_direct_edition is True

    def test_direct_edition_overrides_encoded_variant(self):
        """D0 wins over whatever variant digit the barcode carries."""
        fields = decode("759606073399" + "01231", direct_edition=True)
        assert fields.cover_variant == "D0"
        assert fields.issue_number == 12

    def test_nonzero_variant_is_kept(self):
        """A non-zero variant digit is kept as-is."""
        fields = decode("759606073399" + "01221")
        assert fields.cover_variant == "2"
        assert fields.issue_number == 12

    def test_sixteen_digits_has_no_printing(self):
        """A four-digit extension decodes without a printing number."""
        fields = decode("759606073399" + "0050")
        assert fields.issue_number == 5
        assert fields.cover_variant == "A"
        assert fields.printing is None

    def test_strips_spaces_and_dashes(self):
        """Hand-typed separators should be ignored."""
        fields = decode("7 59606 07339 9-001 0 1")
        assert fields is not None
        assert fields.raw_code == MARVEL_CODE
        assert fields.title_code == "07339"

    def test_multi_digit_issue(self):
        """Three-digit issue numbers should decode fully."""
        assert decode("761941341949" + "12111").issue_number == 121

    @pytest.mark.parametrize("raw", [
        "",
        "759606",
        "759606073399",
        "75960607339900",
        "759606073399001",
    ])
    def test_short_input_returns_none(self, raw):
        """Codes without a usable extension are rejected."""
        assert decode(raw) is None

    def test_overlong_input_returns_none(self):
        """A 13-digit EAN form plus extension is rejected, not truncated."""
        assert decode("0759606073399" + "00101") is None

    def test_issue_zero_returns_none(self):
        """Issue 000 is not a real issue."""
        assert decode("759606073399" + "00001") is None

    def test_non_digit_input_returns_none(self):
        """Letters anywhere in the code are rejected."""
        assert decode("759606073399" + "0A101") is None
        assert decode("ABCDEFGHIJKLMNOPQ") is None

    def test_superscript_digits_return_none(self):
        """Unicode digits int() cannot parse must not raise."""
        assert decode("759606073399" + "0²101") is None

    def test_non_ascii_digits_return_none(self):
        """Arabic-Indic digits must not produce a non-ASCII title code."""
        assert decode("7596060" + "٠٧٣٣٩" + "00101") is None

    def test_non_string_returns_none(self):
        """Non-string input is rejected rather than coerced."""
        assert decode(None) is None
        assert decode(75960607339900101) is None


class TestEncode:
    """Tests for rebuilding fixed-width digits from fields."""

    @pytest.mark.parametrize("raw", [
        "759606073399" + "00101",
        "761941341949" + "12111",
        "709853002110" + "05031",
    ])
    def test_fixed_width_fields_round_trip(self, raw):
        """Re-encoding reproduces the publisher, title and issue substrings."""
        fields = decode(raw)
        rebuilt = encode(fields, number_system=raw[0], check_digit=raw[11])

        assert rebuilt[1:6] == raw[1:6]
        assert rebuilt[6:11] == raw[6:11]
        assert rebuilt[12:15] == raw[12:15]
        assert decode(rebuilt) == fields
