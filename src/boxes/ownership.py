"""
Who owns a wall or a square.

Either nobody (Unclaimed) or exactly one player (ClaimedBy). Once claimed, always claimed.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import Player


@dataclass(frozen=True)
class Unclaimed:
    pass


@dataclass(frozen=True)
class ClaimedBy:
    player: Player


Ownership = Unclaimed | ClaimedBy

UNCLAIMED = Unclaimed()


def owner_of(ownership: Ownership) -> Optional[Player]:
    match ownership:
        case ClaimedBy(player=player):
            return player
        case Unclaimed():
            return None


def is_claimed(ownership: Ownership) -> bool:
    return isinstance(ownership, ClaimedBy)
