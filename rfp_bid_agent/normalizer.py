"""
Value Normalizer

Canonicalizes free-text specification values and pulls out the leading
number so that "11 kV" and "11" can be compared numerically.
"""

import re
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")
# ASCII digits only; float() would otherwise accept other scripts' digits
_NUMBER_RE = re.compile(r"(\d+\.?\d*)", re.ASCII)


def normalize(text: str) -> str:
    """Lower-case, trim and collapse internal whitespace to single spaces."""
    return _WHITESPACE_RE.sub(" ", text.lower().strip())


def extract_number(text: str) -> Optional[float]:
    """
    Extract the first decimal number found in a string.
    
    Args:
        text: Value such as "11 kV", "98.5 %" or "IS 7098"
        
    Returns:
        The parsed number, or None if the text holds no digits
    """
    match = _NUMBER_RE.search(text)
    return float(match.group(1)) if match else None
