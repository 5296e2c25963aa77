"""
Comic Vine publisher id to display name and UPC barcode prefixes.

Keyed by ``volume.publisher.id`` as returned by Comic Vine so provider
results can be cross-referenced with the publisher prefix of a scanned UPC.
"""
from typing import Optional


PUBLISHER_CODE_MAP = {
    # The majors
    "40": {"name": "Marvel Comics", "barcode_prefixes": ["759606", "07339"]},
    "10": {"name": "DC Comics", "barcode_prefixes": ["761941", "761942", "61941"]},
    "17": {"name": "Image Comics", "barcode_prefixes": ["709853"]},
    "31": {"name": "Dark Horse Comics", "barcode_prefixes": ["761568"]},
    "21": {"name": "IDW Publishing", "barcode_prefixes": ["827714"]},
    "28": {"name": "Valiant Comics", "barcode_prefixes": ["858992"]},
    "142": {"name": "Boom! Studios", "barcode_prefixes": ["844284"]},
    "20": {"name": "Archie Comics", "barcode_prefixes": ["688847"]},
    "49": {"name": "Dynamite Entertainment", "barcode_prefixes": ["251929"]},
    "115": {"name": "Titan Comics", "barcode_prefixes": ["812230"]},

    # DC imprints share DC's primary prefix
    "34": {"name": "Vertigo (DC)", "barcode_prefixes": ["761941"]},
    "60": {"name": "WildStorm (DC)", "barcode_prefixes": ["761941"]},
    "57": {"name": "Milestone Media (DC)", "barcode_prefixes": ["761941"]},
    "138": {"name": "DC Black Label", "barcode_prefixes": ["761941"]},

    # Independent and minor publishers
    "160": {"name": "AfterShock Comics", "barcode_prefixes": ["856475"]},
    "360": {"name": "Scout Comics", "barcode_prefixes": ["793591"]},
    "176": {"name": "Source Point Press", "barcode_prefixes": ["753807"]},
    "26": {"name": "Antarctic Press", "barcode_prefixes": ["680572"]},
    "106": {"name": "Aspen Comics", "barcode_prefixes": ["893268"]},
    "153": {"name": "Caliber Comics", "barcode_prefixes": ["716186"]},

    # International
    "41": {"name": "Viz Media", "barcode_prefixes": ["782009"]},
    "180": {"name": "Kodansha Comics", "barcode_prefixes": ["704988"]},
}


def lookup_publisher_name(publisher_id) -> Optional[str]:
    """Display name for a Comic Vine publisher id (int or str), if known."""
    if publisher_id is None:
        return None
    entry = PUBLISHER_CODE_MAP.get(str(publisher_id))
    return entry["name"] if entry else None
