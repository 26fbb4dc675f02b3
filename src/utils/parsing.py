"""Lenient text parsing for host attributes, shorthand and YAML values"""

import math
import re
from typing import Any, List, Optional

_KEY_STRIP = re.compile(r"[-_\s]")


def normalize_key(key: str) -> str:
    """'perceptual-duration', 'perceptual_duration', 'perceptualDuration' → 'perceptualduration'"""
    return _KEY_STRIP.sub("", str(key)).lower()


def parse_number(raw: Any) -> Optional[float]:
    """
    Parse a finite float, or None if it cannot be parsed.

    0 is a valid value. Booleans, NaN and infinities are rejected.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    return value if math.isfinite(value) else None


def split_list(raw: str, separators: str = ",") -> List[str]:
    """
    Split a property list and trim entries.

    Order and duplicates are preserved; empty entries are dropped.
    """
    pattern = "[" + re.escape(separators) + "]"
    return [item.strip() for item in re.split(pattern, raw) if item.strip()]
