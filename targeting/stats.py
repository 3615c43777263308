"""Normalization of raw combatant stat fields into numeric stat bundles."""

import math
import re
from collections.abc import Mapping

from targeting import StatBundle

STAT_NAMES: tuple[str, ...] = ('speed', 'strength', 'defense', 'dexterity')

# Thousands separators and stray inner whitespace ("1,234,567", "1 234 567")
_SEPARATOR_RE = re.compile(r'[,_\s]')
_INTEGER_RE = re.compile(r'\+?\d+')


def parse_stat(value) -> int | float | None:
    """Parse a single raw stat value.

    Args:
        value: Raw field value (string, number or None).

    Returns:
        Non-negative number, or None if the value is missing or malformed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            return None
        return value
    if not isinstance(value, str):
        return None

    clean = _SEPARATOR_RE.sub('', value.strip())
    if not _INTEGER_RE.fullmatch(clean):
        return None
    return int(clean)


def record_field(record, name: str, default=None):
    """Read a field from a Combatant or a mapping with the same keys."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def normalize(raw) -> StatBundle:
    """Convert a raw combatant record into a StatBundle.

    Accepts Combatant instances as well as mappings with the same keys.
    Never raises: unparseable fields come back as None.
    """
    return StatBundle(**{name: parse_stat(record_field(raw, name)) for name in STAT_NAMES})


def is_complete(bundle: StatBundle) -> bool:
    """Check whether all four stats are present and valid."""
    for name in STAT_NAMES:
        value = getattr(bundle, name)
        if value is None or not math.isfinite(value) or value < 0:
            return False
    return True


def total(bundle: StatBundle) -> int | float:
    """Sum of all stats, counting missing ones as zero."""
    return sum(getattr(bundle, name) or 0 for name in STAT_NAMES)


def format_total(bundle: StatBundle) -> str:
    """Format the stat total with thousands separators, or 'N/A' if incomplete."""
    if not is_complete(bundle):
        return 'N/A'
    return f'{total(bundle):,}'
