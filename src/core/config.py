"""
Configuration

Loaded from environment variables (or a .env file). Defaults:
a 5x5 grid of 50px squares with 10px walls.

Values are kept as the raw strings from the environment and only interpreted when a game gets created,
so a typo in the environment shows up as a ConfigurationError instead of breaking the import.
"""

import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from src.core.exceptions import ConfigurationError

load_dotenv()


@dataclass(frozen=True)
class GridSettings:
    rows: int
    cols: int
    cell_size: float
    wall_thickness: float


class Config:
    """Application configuration loaded from environment variables."""

    # Grid
    GRID_ROWS: str = os.getenv("BOXES_GRID_ROWS", "5")
    GRID_COLS: str = os.getenv("BOXES_GRID_COLS", "5")
    CELL_SIZE: str = os.getenv("BOXES_CELL_SIZE", "50.0")
    WALL_THICKNESS: str = os.getenv("BOXES_WALL_THICKNESS", "10.0")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///boxes.db")

    @classmethod
    def grid_settings(cls) -> GridSettings:
        """Parse and check the configured grid. Raises if it could never be laid out."""
        try:
            settings = GridSettings(
                rows=int(cls.GRID_ROWS),
                cols=int(cls.GRID_COLS),
                cell_size=float(cls.CELL_SIZE),
                wall_thickness=float(cls.WALL_THICKNESS),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Cannot read grid configuration: {exc}") from exc

        if settings.rows < 1 or settings.cols < 1:
            raise ConfigurationError(
                f"Grid needs at least one row and one column, got {settings.rows}x{settings.cols}."
            )
        for name, value in [
            ("cell size", settings.cell_size),
            ("wall thickness", settings.wall_thickness),
        ]:
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(
                    f"Configured {name} must be a positive number, got {value}."
                )
        return settings
