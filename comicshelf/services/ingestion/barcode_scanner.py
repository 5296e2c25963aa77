"""
Barcode detection from images using pyzxing.

Extracts the UPC-A digits and EAN-5 supplement from a photo of a comic's
barcode box so it can go through the same decoding as a typed code.
"""
import io
import os
import tempfile
from typing import List, Optional

from PIL import Image, UnidentifiedImageError
from pyzxing import BarCodeReader


UPC_FORMATS = {"UPC_A", "EAN_13"}
EXTENSION_FORMATS = {"EAN_5", "UPC_EAN_EXTENSION"}


def _text(value) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return str(value or "").strip()


def to_upc_a(digits: str, barcode_format: str) -> str:
    """ZXing may report a UPC-A as a 13-digit EAN-13 with a leading zero."""
    if barcode_format == "EAN_13" and len(digits) == 13 and digits.startswith("0"):
        return digits[1:]
    return digits


class BarcodeScanner:
    """
    Scans comic barcodes from images using pyzxing (ZXing library).

    The reader is created lazily because pyzxing may download its Java
    dependency on first use.
    """

    def __init__(self):
        self._reader: Optional[BarCodeReader] = None

    @property
    def reader(self) -> BarCodeReader:
        if self._reader is None:
            self._reader = BarCodeReader()
        return self._reader

    def scan_image(self, image_bytes: bytes) -> Optional[str]:
        """
        Extract the barcode digits from image bytes.

        Args:
            image_bytes: Raw image file bytes (JPEG, PNG, etc.)

        Returns:
            UPC digits followed by any EAN-5 digits, or None if no barcode found

        Raises:
            ValueError: If image is invalid or cannot be processed
        """
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ValueError(f"Invalid image: {str(e)}")

        # ZXing reads from a file path; normalise everything to PNG first
        with tempfile.NamedTemporaryFile(delete=False, suffix=".png") as tmp:
            image.convert("RGB").save(tmp, format="PNG")
            tmp_path = tmp.name

        try:
            results = self.reader.decode(tmp_path)
        except Exception as e:
            raise ValueError(f"Failed to process image: {str(e)}")
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)

        return self.combine_results(results or [])

    def combine_results(self, results: List[dict]) -> Optional[str]:
        """Join the main UPC with its EAN-5 supplement when ZXing reports them separately."""
        upc = None
        extension = ""

        for result in results:
            parsed = _text(result.get("parsed"))
            if not parsed:
                continue
            barcode_format = _text(result.get("format"))

            if barcode_format in EXTENSION_FORMATS:
                extension = extension or parsed
            elif upc is None and (barcode_format in UPC_FORMATS or not barcode_format):
                upc = to_upc_a(parsed, barcode_format)

        if upc is None:
            return None

        return f"{upc}{extension}"


# Singleton instance
barcode_scanner = BarcodeScanner()
