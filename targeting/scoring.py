"""Matchup scoring and difficulty classification for attacker/target pairs."""

import math
from enum import Enum

from targeting import StatBundle

WEIGHTS: dict[str, float] = {
    'hit': 0.40,     # attacker speed vs target dexterity
    'power': 0.40,   # attacker strength vs target defense
    'dodge': 0.10,   # attacker dexterity vs target speed
    'guard': 0.10,   # attacker defense vs target strength
}

# Cap used when one side of a ratio is zero
RATIO_CAP = 10.0


class MatchClass(Enum):
    """Difficulty tier of a matchup, ordered weakest to strongest for the attacker.

    Each tier carries its rank, its score floor, whether that floor is
    inclusive, and display metadata (label and color token).
    """

    OVERMATCHED = (0, 'overmatched', -math.inf, True, 'Avoid', 'red-600')
    UNFAVORED = (1, 'unfavored', -0.5, False, 'High Risk', 'orange-500')
    EVEN = (2, 'even', -0.2, True, 'Even Match', 'yellow-500')
    FAVORED = (3, 'favored', 0.2, True, 'Likely Win', 'green-500')
    OVERPOWERED = (4, 'overpowered', 0.5, True, 'Easy Win', 'green-700')

    def __init__(self, rank, key, floor, floor_inclusive, label, color):
        self.rank = rank
        self.key = key
        self.floor = floor
        self.floor_inclusive = floor_inclusive
        self.label = label
        self.color = color

    @classmethod
    def from_key(cls, key: str) -> 'MatchClass':
        """Look up a tier by its key (case-insensitive).

        Raises:
            ValueError: If no tier has that key.
        """
        wanted = key.strip().lower()
        for match_class in cls:
            if match_class.key == wanted:
                return match_class
        raise ValueError(f"Unbekannte Match-Klasse: {key!r}")


# Strongest tier first, the order classify() tests floors in
_TIERS_DESCENDING = tuple(sorted(MatchClass, key=lambda c: c.rank, reverse=True))


def compare_match_class(a: MatchClass, b: MatchClass) -> int:
    """Compare two tiers by rank (negative, zero or positive)."""
    return a.rank - b.rank


def safe_ratio(numerator: float, denominator: float) -> float:
    """Ratio of two stats that stays positive and finite.

    Non-finite operands are neutral (1). A zero denominator gives RATIO_CAP
    for a positive numerator and 1 otherwise. A zero numerator against a
    positive denominator gives 1 / (RATIO_CAP * denominator), with the
    denominator counted as at least 1, so it stays below the ratio of a
    numerator of 1.
    """
    if not math.isfinite(numerator) or not math.isfinite(denominator):
        return 1.0
    if denominator <= 0:
        return RATIO_CAP if numerator > 0 else 1.0
    if numerator <= 0:
        return 1.0 / (RATIO_CAP * max(denominator, 1.0))
    return numerator / denominator


def log_ratio(numerator: float, denominator: float) -> float:
    """log10 of safe_ratio(); a 10x advantage is worth +1 regardless of scale."""
    return math.log10(safe_ratio(numerator, denominator))


def evaluate_matchup(attacker: StatBundle, target: StatBundle) -> float:
    """Estimate how strongly a matchup favors the attacker.

    Stat ratios are compressed with log10 to approximate the diminishing
    returns of the game's hit and damage formulas. The result is a weighted
    sum of four comparisons:

        - hit:   attacker speed vs target dexterity
        - power: attacker strength vs target defense
        - dodge: attacker dexterity vs target speed
        - guard: attacker defense vs target strength

    Both bundles are expected to be complete.

    Args:
        attacker: Normalized stats of the attacker.
        target: Normalized stats of the target.

    Returns:
        Score, positive if the attacker is favored, 0.0 for identical stats.
    """
    hit = log_ratio(attacker.speed, target.dexterity)
    power = log_ratio(attacker.strength, target.defense)
    dodge = log_ratio(attacker.dexterity, target.speed)
    guard = log_ratio(attacker.defense, target.strength)

    return (
        WEIGHTS['hit'] * hit
        + WEIGHTS['power'] * power
        + WEIGHTS['dodge'] * dodge
        + WEIGHTS['guard'] * guard
    )


def classify(score: float) -> MatchClass:
    """Map a matchup score onto its MatchClass.

    Floors are tested from the strongest tier down; a score that clears no
    floor (including NaN) lands in OVERMATCHED.
    """
    for match_class in _TIERS_DESCENDING:
        if match_class.floor_inclusive:
            if score >= match_class.floor:
                return match_class
        elif score > match_class.floor:
            return match_class
    return MatchClass.OVERMATCHED
