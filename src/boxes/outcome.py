"""Scores and the result of a finished game"""

from typing import Iterable, Optional

from src.boxes.board import Square
from src.boxes.ownership import owner_of
from src.core.exceptions import InvalidStateError
from src.core.shared_types import Player


def tally(squares: Iterable[Square]) -> dict[Player, int]:
    """Number of squares each player won so far. Both players are always in the result."""
    counts = {player: 0 for player in Player}
    for square in squares:
        player = owner_of(square.ownership)
        if player is not None:
            counts[player] += 1
    return counts


def outcome(squares: Iterable[Square]) -> Optional[Player]:
    """
    The winner, or None for a tie.

    Only meaningful once every square has an owner. Asking earlier is a mistake of the caller.
    """
    squares = list(squares)
    if not all(square.is_claimed for square in squares):
        raise InvalidStateError("Game has not finished yet. Squares are still open.")

    counts = tally(squares)
    if counts[Player.ONE] > counts[Player.TWO]:
        return Player.ONE
    if counts[Player.TWO] > counts[Player.ONE]:
        return Player.TWO
    return None
