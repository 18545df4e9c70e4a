"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class Player(StrEnum):
    ONE = "one"
    TWO = "two"

    def other(self) -> "Player":
        return Player.TWO if self == Player.ONE else Player.ONE


# --- NOTE horizontal < vertical as strings. WallId ordering relies on this for tie-breaking clicks.
class Orientation(StrEnum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
