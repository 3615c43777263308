"""Parser for pasted spy reports."""

import logging
import re

from rapidfuzz import process
from rapidfuzz.distance import JaroWinkler

from targeting import Combatant

log = logging.getLogger(__name__)

# Minimum Jaro-Winkler similarity for an abbreviated label
LABEL_SIMILARITY_THRESHOLD = 0.84
# Longer labels must match exactly
ABBREVIATION_MAX_LENGTH = 4

FIELD_LABELS: dict[str, str] = {
    'level': 'level',
    'speed': 'speed',
    'spd': 'speed',
    'strength': 'strength',
    'defense': 'defense',
    'defence': 'defense',
    'dexterity': 'dexterity',
}

_LABEL_CHOICES = list(FIELD_LABELS)

_BLOCK_START_RE = re.compile(r'(?=^\s*Name:)', re.IGNORECASE | re.MULTILINE)
_LABEL_LINE_RE = re.compile(r'^\s*([A-Za-z][A-Za-z ]*?)\s*:\s*(.*)$')
_NAME_ID_RE = re.compile(r'^(.*?)\s*\[(\d+)\]')


def _resolve(label: str) -> tuple[str | None, bool]:
    """Resolve a label to (field name, matched exactly)."""
    key = label.strip().lower()
    if not key:
        return None, False
    if key in FIELD_LABELS:
        return FIELD_LABELS[key], True
    if len(key) > ABBREVIATION_MAX_LENGTH:
        return None, False

    best = process.extractOne(
        key, _LABEL_CHOICES,
        scorer=JaroWinkler.similarity,
        score_cutoff=LABEL_SIMILARITY_THRESHOLD,
    )
    if best is None:
        return None, False
    return FIELD_LABELS[best[0]], False


def resolve_label(label: str) -> str | None:
    """Map a report label onto a Combatant field name.

    Exact (case-insensitive) labels always resolve. Short labels of at most
    ABBREVIATION_MAX_LENGTH letters ('Str', 'Dex') fall back to the closest
    known label by Jaro-Winkler similarity if it clears
    LABEL_SIMILARITY_THRESHOLD. Longer unknown labels never match.

    Args:
        label: Label text in front of the colon, e.g. 'Strength' or 'Dex'.

    Returns:
        Field name, or None if the label is unknown.
    """
    return _resolve(label)[0]


def _parse_name(value: str) -> str:
    """Strip a trailing player id, 'Alpha [123]' -> 'Alpha'."""
    match = _NAME_ID_RE.match(value)
    return match.group(1).strip() if match else value.strip()


def parse_spy_text(text: str) -> list[Combatant]:
    """Parse a block of pasted spy reports into Combatant records.

    Every report starts with a 'Name:' line; stat values are kept as raw
    strings for the stat normalizer. Lines that carry no known label are
    ignored, fields that never appear stay empty. An exact label replaces a
    value taken from an earlier abbreviated one.

    Args:
        text: Free text containing one or more spy reports.

    Returns:
        List of Combatant objects in report order.
    """
    combatants: list[Combatant] = []

    for block in _BLOCK_START_RE.split(text):
        block = block.strip()
        if not block.lower().startswith('name:'):
            continue

        fields: dict[str, str] = {}
        exact_fields: set[str] = set()
        for line in block.splitlines():
            match = _LABEL_LINE_RE.match(line)
            if not match:
                continue
            label, value = match.group(1), match.group(2).strip()
            if label.strip().lower() == 'name':
                fields.setdefault('name', _parse_name(value))
                continue
            field_name, exact = _resolve(label)
            if field_name is None or field_name in exact_fields:
                continue
            if exact:
                fields[field_name] = value
                exact_fields.add(field_name)
            elif field_name not in fields:
                fields[field_name] = value

        combatants.append(Combatant(**fields))

    log.info("%d Spionageberichte gelesen", len(combatants))
    return combatants
