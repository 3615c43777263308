"""Report generation for match matrices (CSV, HTML, summary)."""

import csv
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from targeting import MatchEntry, MatchGroup
from targeting.scoring import MatchClass
from targeting.stats import format_total, normalize, record_field

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'

CSV_COLUMNS = [
    'Target',
    'Target_Level',
    'Target_Speed',
    'Target_Strength',
    'Target_Defense',
    'Target_Dexterity',
    'Target_Total',
    'Attacker',
    'Score',
    'Match_Class',
    'Label',
]


def _text(record, name: str) -> str:
    value = record_field(record, name)
    return '' if value is None else str(value)


def _target_columns(group: MatchGroup) -> dict:
    target = group.target
    return {
        'Target': _text(target, 'name'),
        'Target_Level': _text(target, 'level'),
        'Target_Speed': _text(target, 'speed'),
        'Target_Strength': _text(target, 'strength'),
        'Target_Defense': _text(target, 'defense'),
        'Target_Dexterity': _text(target, 'dexterity'),
        'Target_Total': format_total(normalize(target)),
    }


def _entry_to_row(group: MatchGroup, entry: MatchEntry | None) -> dict:
    """Flatten one (target, attacker) pair into a dict for CSV/HTML output."""
    row = _target_columns(group)
    row.update({
        'Attacker': entry.attacker_name if entry else '',
        'Score': f'{entry.score:.4f}' if entry else '',
        'Match_Class': entry.match_class.key if entry else '',
        'Label': entry.match_class.label if entry else '',
        # Row state and color token for the HTML template
        '_matched': entry is not None,
        '_color': entry.match_class.color if entry else '',
    })
    return row


def _matrix_to_rows(matrix: list[MatchGroup]) -> list[dict]:
    rows = []
    for group in matrix:
        if not group.attackers:
            rows.append(_entry_to_row(group, None))
            continue
        for entry in group.attackers:
            rows.append(_entry_to_row(group, entry))
    return rows


def write_csv_report(matrix: list[MatchGroup], output_path: Path) -> None:
    """Write a match matrix as a CSV report.

    One row per attacker entry; targets without attackers get a single row
    with empty attacker columns. Uses UTF-8 with BOM (utf-8-sig) so that
    spreadsheet tools pick up the encoding.

    Args:
        matrix: Match groups, already sorted and filtered.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = _matrix_to_rows(matrix)
    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS, extrasaction='ignore')
        writer.writeheader()
        writer.writerows(rows)

    log.info("CSV-Report geschrieben: %s (%d Zeilen)", output_path, len(rows))


def write_html_report(
    matrix: list[MatchGroup],
    output_path: Path,
    title: str = '',
) -> None:
    """Write a match matrix as an HTML report using Jinja2.

    Args:
        matrix: Match groups, already sorted and filtered.
        output_path: Path for the output HTML file.
        title: Name of the target roster (for the report title).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    groups = [
        {'target': _target_columns(group), 'rows': _matrix_to_rows([group])}
        for group in matrix
    ]
    html = template.render(
        title=title,
        groups=groups,
        stats=_compute_stats(matrix),
        classes=list(MatchClass),
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML-Report geschrieben: %s", output_path)


def _compute_stats(matrix: list[MatchGroup]) -> dict:
    """Compute summary statistics for a match matrix."""
    per_class = {match_class.key: 0 for match_class in MatchClass}
    for group in matrix:
        for entry in group.attackers:
            per_class[entry.match_class.key] += 1

    return {
        'targets': len(matrix),
        'unmatched_targets': sum(1 for g in matrix if not g.attackers),
        'entries': sum(per_class.values()),
        'per_class': per_class,
    }


def print_summary(matrix: list[MatchGroup], title: str = '') -> None:
    """Print a summary of a match matrix to stdout.

    Args:
        matrix: Match groups, already sorted and filtered.
        title: Name of the target roster.
    """
    stats = _compute_stats(matrix)

    print(f"\n=== Ziel-Report: {title} ===")
    print(f"Ziele:                     {stats['targets']:>5}")
    print(f"Ziele ohne Angreifer:      {stats['unmatched_targets']:>5}")
    print(f"Paarungen gesamt:          {stats['entries']:>5}")
    print("---")
    for match_class in sorted(MatchClass, key=lambda c: c.rank, reverse=True):
        label = f"  - {match_class.label}:"
        print(f"{label:<27}{stats['per_class'][match_class.key]:>5}")
    print()
