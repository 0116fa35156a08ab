"""User-configurable game settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from slowchess.core.enums import Color


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # Opponent
    vs_computer: bool = True
    computer_color: Color = Color.BLACK

    # Heuristic policy
    policy_jitter: int = 30
    center_bonus: int = 20

    # Persistence; None means the platform data directory
    save_path: Path | None = None
