"""torn-target-matcher – CLI-Tool zur Zielauswahl anhand von Spionageberichten."""

import argparse
import logging
from pathlib import Path

from targeting import Combatant
from targeting.matching import build_matrix, filter_matrix
from targeting.reader import read_combatants
from targeting.reporter import print_summary, write_csv_report, write_html_report
from targeting.scoring import MatchClass

TARGET_SUFFIXES = ('.txt', '.csv', '.tsv')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Bewertet Angreifer gegen Ziele anhand ihrer Kampfwerte.',
        prog='targeter.py',
    )
    parser.add_argument(
        '--attackers', required=True, type=Path,
        help='Pfad zur Angreifer-Datei (Spionageberichte, CSV oder TSV)',
    )
    parser.add_argument(
        '--targets', type=Path,
        help='Pfad zur Ziel-Datei',
    )
    parser.add_argument(
        '--targets-dir', type=Path,
        help='Verzeichnis mit Ziel-Dateien (Batch-Modus)',
    )
    parser.add_argument(
        '--output', type=Path,
        help='Pfad fuer die Report-Ausgabe (CSV)',
    )
    parser.add_argument(
        '--output-dir', type=Path,
        help='Verzeichnis fuer Report-Ausgaben (Batch-Modus)',
    )
    parser.add_argument(
        '--min-class', type=MatchClass.from_key, default=MatchClass.EVEN,
        metavar='{' + ','.join(c.key for c in MatchClass) + '}',
        help='Niedrigste Match-Klasse, die ausgegeben wird (Standard: even)',
    )
    parser.add_argument(
        '--include-unmatched', action='store_true',
        help='Ziele ohne passende Angreifer ebenfalls ausgeben',
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Zusaetzlich einen HTML-Report erzeugen',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Zusammenfassung auf stdout ausgeben',
    )
    return parser


def process_single_roster(
    attackers: list[Combatant],
    targets_path: Path,
    output_path: Path,
    min_class: MatchClass,
    include_unmatched: bool,
    html: bool,
    summary: bool,
) -> None:
    """Match all attackers against a single target roster and write reports."""
    targets = read_combatants(targets_path)
    matrix = build_matrix(attackers, targets)
    matrix = filter_matrix(matrix, min_class, include_unmatched)

    write_csv_report(matrix, output_path)

    if html:
        html_path = output_path.with_suffix('.html')
        write_html_report(matrix, html_path, targets_path.stem)

    if summary:
        print_summary(matrix, targets_path.name)


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    parser = build_parser()
    args = parser.parse_args()

    if not args.targets and not args.targets_dir:
        parser.error('Entweder --targets oder --targets-dir muss angegeben werden.')

    if args.targets and not args.output:
        parser.error('--output ist erforderlich bei Verwendung von --targets.')

    if args.targets_dir and not args.output_dir:
        parser.error('--output-dir ist erforderlich bei Verwendung von --targets-dir.')

    attackers = read_combatants(args.attackers)
    if not attackers:
        logging.warning("Keine Angreifer in %s gefunden.", args.attackers)

    if args.targets:
        process_single_roster(
            attackers, args.targets, args.output,
            args.min_class, args.include_unmatched, args.html, args.summary,
        )
    elif args.targets_dir:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        roster_files = sorted(
            f for f in args.targets_dir.iterdir()
            if f.is_file() and f.suffix.lower() in TARGET_SUFFIXES
        )
        # Exclude the attacker roster from batch processing
        attackers_resolved = args.attackers.resolve()
        roster_files = [f for f in roster_files if f.resolve() != attackers_resolved]

        if not roster_files:
            logging.warning("Keine Ziel-Dateien in %s gefunden.", args.targets_dir)
            return

        for targets_path in roster_files:
            output_path = args.output_dir / f"report_{targets_path.stem}.csv"
            logging.info("Verarbeite %s ...", targets_path.name)
            process_single_roster(
                attackers, targets_path, output_path,
                args.min_class, args.include_unmatched, args.html, args.summary,
            )


if __name__ == '__main__':
    main()
