"""
Grading scale and default user inputs for new comic entries.
"""

# (value stored, label displayed)
COMIC_GRADES = [
    ("Unassigned", "Unassigned Grade"),
    ("10.0", "10.0 Gem Mint (GM)"),
    ("9.8", "9.8 Near Mint/Mint (NM/M)"),
    ("9.6", "9.6 Near Mint Plus (NM+)"),
    ("9.4", "9.4 Near Mint (NM)"),
    ("9.2", "9.2 Near Mint Minus (NM-)"),
    ("9.0", "9.0 Very Fine/Near Mint (VF/NM)"),
    ("8.5", "8.5 Very Fine Plus (VF+)"),
    ("8.0", "8.0 Very Fine (VF)"),
    ("7.5", "7.5 Very Fine Minus (VF-)"),
    ("7.0", "7.0 Fine/Very Fine (FN/VF)"),
    ("6.5", "6.5 Fine Plus (FN+)"),
    ("6.0", "6.0 Fine (FN)"),
    ("5.5", "5.5 Fine Minus (FN-)"),
    ("5.0", "5.0 Very Good/Fine (VG/FN)"),
    ("4.5", "4.5 Very Good Plus (VG+)"),
    ("4.0", "4.0 Very Good (VG)"),
    ("3.5", "3.5 Very Good Minus (VG-)"),
    ("3.0", "3.0 Good/Very Good (G/VG)"),
    ("2.5", "2.5 Good Plus (G+)"),
    ("2.0", "2.0 Good (G)"),
    ("1.8", "1.8 Good Minus (G-)"),
    ("1.5", "1.5 Fair/Poor (F/P)"),
    ("1.0", "1.0 Fair (FA)"),
    ("0.5", "0.5 Poor (Poor)"),
    ("0.3", "0.3 Extremely Poor (Poor-)"),
    ("0.1", "0.1 Incomplete (INC)"),
]

NOT_GRADED = "Not Graded"

VALID_GRADES = {value for value, _ in COMIC_GRADES} | {NOT_GRADED}

# Sentinel variant for Direct Market editions (barcode-less or marked "Direct")
DIRECT_EDITION_VARIANT = "D0"

DEFAULT_STORAGE_BOX = "Unsorted"
