"""Construction and filtering of the attacker x target match matrix."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from targeting import Combatant, InvalidInput, MatchEntry, MatchGroup
from targeting.scoring import MatchClass, classify, compare_match_class, evaluate_matchup
from targeting.stats import is_complete, normalize, record_field, total

log = logging.getLogger(__name__)


def _check_roster(roster, label: str) -> None:
    """Reject anything that is not a list-like sequence of records."""
    if (
        not isinstance(roster, Sequence)
        or isinstance(roster, (str, bytes, bytearray))
        or isinstance(roster, Mapping)
    ):
        raise InvalidInput(
            f"{label} muss eine Sequenz sein, nicht {type(roster).__name__}"
        )


def _name_of(record) -> str:
    return str(record_field(record, 'name', ''))


def build_matrix(
    attackers: Sequence[Combatant],
    targets: Sequence[Combatant],
) -> list[MatchGroup]:
    """Evaluate every attacker against every target.

    Combatants with incomplete stats are left out: incomplete targets do not
    appear at all, incomplete attackers are never scored. A complete target
    without any eligible attacker is kept with an empty attacker tuple.

    Args:
        attackers: Raw attacker records.
        targets: Raw target records.

    Returns:
        One MatchGroup per complete target, ordered by descending stat total.
        Attackers within a group are ordered by descending score. Both sorts
        are stable, so ties keep their input order.

    Raises:
        InvalidInput: If either argument is not a sequence.
    """
    _check_roster(attackers, 'attackers')
    _check_roster(targets, 'targets')

    eligible_attackers = []
    for attacker in attackers:
        bundle = normalize(attacker)
        if is_complete(bundle):
            eligible_attackers.append((_name_of(attacker), bundle))
        else:
            log.debug("Angreifer ohne vollstaendige Stats ignoriert: %s", _name_of(attacker))

    scored_targets = []
    for target in targets:
        target_bundle = normalize(target)
        if not is_complete(target_bundle):
            log.debug("Ziel ohne vollstaendige Stats ignoriert: %s", _name_of(target))
            continue

        entries = []
        for name, attacker_bundle in eligible_attackers:
            score = evaluate_matchup(attacker_bundle, target_bundle)
            entries.append(MatchEntry(
                attacker_name=name,
                score=score,
                match_class=classify(score),
            ))
        entries.sort(key=lambda e: e.score, reverse=True)

        scored_targets.append(
            (total(target_bundle), MatchGroup(target=target, attackers=tuple(entries)))
        )

    scored_targets.sort(key=lambda item: item[0], reverse=True)
    matrix = [group for _, group in scored_targets]

    log.info(
        "Matrix erstellt: %d Ziele x %d Angreifer (%d/%d ignoriert)",
        len(matrix), len(eligible_attackers),
        len(targets) - len(matrix), len(attackers) - len(eligible_attackers),
    )
    return matrix


def filter_matrix(
    matrix: Iterable[MatchGroup],
    min_class: MatchClass = MatchClass.EVEN,
    include_unmatched_targets: bool = False,
    include_classes: Iterable[MatchClass] | None = None,
) -> list[MatchGroup]:
    """Restrict a match matrix to attackers of a minimum difficulty tier.

    Args:
        matrix: Result of build_matrix().
        min_class: Lowest tier an attacker entry may have to be kept.
        include_unmatched_targets: Keep groups whose attacker list ends up
            empty instead of dropping them.
        include_classes: Optional whitelist of tiers; when non-empty, an
            entry must also belong to one of them.

    Returns:
        New list of MatchGroup; ordering is preserved.
    """
    # An empty whitelist filters nothing
    allowed = set(include_classes or ()) or None

    result: list[MatchGroup] = []
    for group in matrix:
        kept = tuple(
            entry for entry in group.attackers
            if compare_match_class(entry.match_class, min_class) >= 0
            and (allowed is None or entry.match_class in allowed)
        )
        if not kept and not include_unmatched_targets:
            continue
        result.append(MatchGroup(target=group.target, attackers=kept))
    return result
