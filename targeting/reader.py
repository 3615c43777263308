"""Roster file reader with automatic encoding detection and field normalization."""

import csv
import io
import logging
import re
from pathlib import Path

from targeting import Combatant
from targeting.parser import parse_spy_text

log = logging.getLogger(__name__)

# Matches any sequence of whitespace (including Unicode whitespace like U+2006)
_WHITESPACE_RE = re.compile(r'\s+')

TABLE_DELIMITERS = {'.csv': ',', '.tsv': '\t'}

COLUMN_FIELDS = {
    'Name': 'name',
    'Level': 'level',
    'Speed': 'speed',
    'Strength': 'strength',
    'Defense': 'defense',
    'Dexterity': 'dexterity',
}


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the roster file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def normalize_whitespace(value: str) -> str:
    """Collapse any whitespace run into a single space and strip the ends."""
    return _WHITESPACE_RE.sub(' ', value).strip()


def _read_text(path: Path) -> str:
    encoding = detect_encoding(path)
    with open(path, 'r', encoding=encoding) as f:
        content = f.read()
    # Strip BOM if present
    return content.lstrip('\ufeff')


def read_table(content: str, delimiter: str, source: str = '<table>') -> list[Combatant]:
    """Read combatants from delimited text with a header row.

    Args:
        content: Table text.
        delimiter: Column delimiter.
        source: Name used in log and error messages.

    Returns:
        List of Combatant objects.

    Raises:
        ValueError: If the header is missing or lacks required columns.
    """
    reader = csv.DictReader(io.StringIO(content), delimiter=delimiter)

    if reader.fieldnames is None:
        raise ValueError(f"Datei {source} ist leer oder hat keine Header-Zeile.")
    actual_cols = {normalize_whitespace(c).title() for c in reader.fieldnames}
    missing = set(COLUMN_FIELDS) - actual_cols
    if missing:
        raise ValueError(
            f"Fehlende Spalten in {source}: {', '.join(sorted(missing))}"
        )

    combatants: list[Combatant] = []
    for row_num, row in enumerate(reader, start=2):
        cleaned = {normalize_whitespace(k).title(): normalize_whitespace(v or '')
                   for k, v in row.items() if k is not None}
        if not cleaned.get('Name'):
            log.warning("Zeile %d in %s uebersprungen: kein Name", row_num, source)
            continue
        combatants.append(Combatant(
            **{field: cleaned.get(col, '') for col, field in COLUMN_FIELDS.items()}
        ))

    return combatants


def read_combatants(path: str | Path) -> list[Combatant]:
    """Read combatant records from a roster file.

    '.csv' and '.tsv' files are read as tables with Name, Level, Speed,
    Strength, Defense and Dexterity columns; any other file is treated as
    pasted spy reports. UTF-16LE (with BOM) and UTF-8 are detected
    automatically.

    Args:
        path: Path to the roster file.

    Returns:
        List of Combatant objects.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a table lacks required columns.
    """
    path = Path(path)
    content = _read_text(path)

    delimiter = TABLE_DELIMITERS.get(path.suffix.lower())
    if delimiter is not None:
        combatants = read_table(content, delimiter, str(path))
    else:
        combatants = parse_spy_text(content)

    log.info("%d Kaempfer gelesen aus %s", len(combatants), path)
    return combatants
