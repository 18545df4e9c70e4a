"""
Which wall did the player click?

Wall boxes have a thickness, so near the corners of a square a horizontal and a vertical box overlap,
and neighbouring walls on the same line touch. Hit-testing is therefore done on ALL boxes and the best hit picked:

1. the wall whose box centre is closest to the point
2. if still equal, the smallest WallId (horizontal before vertical, then line, then position)
"""

from typing import Mapping, Optional

from src.boxes.geometry import Point, Rect
from src.boxes.grid import WallId


def resolve(point: Point, walls: Mapping[WallId, Rect]) -> Optional[WallId]:
    """None if the point is not on any wall (inside a square, or outside the grid)."""
    hits = [
        (rect.center.distance_to(point), wall_id)
        for wall_id, rect in walls.items()
        if rect.contains(point)
    ]
    if not hits:
        return None
    _, wall_id = min(hits)
    return wall_id
