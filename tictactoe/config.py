"""
Game configuration for TicTacToe.
All the tunables for the board, the computer opponent, and sessions.
"""

import os
from typing import Optional

from .errors import InvalidMark
from .game_state import Mark


class GameConfig:
    """
    Configuration class for game settings.
    Class attributes are the defaults; an instance can override the
    medium-tier probability and default tier.
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3

    # ==================== OPPONENT SETTINGS ====================
    # Chance that the medium tier plays the strong move instead of a random one
    MEDIUM_STRONG_PROBABILITY = 0.7

    # Terminal score before the depth adjustment (win = 10 - depth)
    WIN_SCORE = 10

    # Tier used when a computer game is created without one
    DEFAULT_TIER = "medium"

    # ==================== SESSION SETTINGS ====================
    # Mark the computer plays; as X it makes the opening move itself
    COMPUTER_MARK = Mark.O

    # Environment variables read by from_env()
    ENV_MEDIUM_PROBABILITY = "TICTACTOE_MEDIUM_STRONG_PROBABILITY"
    ENV_DEFAULT_TIER = "TICTACTOE_DEFAULT_TIER"

    def __init__(
        self,
        medium_strong_probability: Optional[float] = None,
        default_tier: Optional[str] = None,
    ):
        if medium_strong_probability is not None:
            probability = float(medium_strong_probability)
            if not 0.0 <= probability <= 1.0:
                raise ValueError(
                    f"medium_strong_probability must be between 0 and 1, got {probability}"
                )
            self.MEDIUM_STRONG_PROBABILITY = probability

        if default_tier is not None:
            tier = default_tier.strip().lower()
            if tier not in ("weak", "medium", "strong"):
                raise InvalidMark(f"Unknown tier: {default_tier!r}")
            self.DEFAULT_TIER = tier

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Build a config, taking overrides from the environment when set."""
        probability = os.getenv(cls.ENV_MEDIUM_PROBABILITY)
        tier = os.getenv(cls.ENV_DEFAULT_TIER)
        return cls(
            medium_strong_probability=float(probability) if probability else None,
            default_tier=tier or None,
        )
