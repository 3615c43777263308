"""Core module for torn-target-matcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from targeting.scoring import MatchClass

Stat = Optional[Union[int, float]]


class InvalidInput(TypeError):
    """Raised when a roster passed to the matching engine is not a sequence."""


@dataclass(frozen=True)
class Combatant:
    """Represents a raw combatant record as parsed from a spy report or roster."""

    name: str
    level: str = ''
    speed: str = ''
    strength: str = ''
    defense: str = ''
    dexterity: str = ''


@dataclass(frozen=True)
class StatBundle:
    """Normalized battle stats of a combatant (None = missing)."""

    speed: Stat = None
    strength: Stat = None
    defense: Stat = None
    dexterity: Stat = None


@dataclass(frozen=True)
class MatchEntry:
    """One attacker evaluated against a fixed target."""

    attacker_name: str
    score: float
    match_class: MatchClass


@dataclass(frozen=True)
class MatchGroup:
    """A target together with its ranked attacker evaluations."""

    target: Combatant
    attackers: tuple[MatchEntry, ...] = field(default_factory=tuple)
