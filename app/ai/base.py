"""
Base AI Player class for Gobblet
Abstract base class that all move-selection strategies inherit from
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import random

from ..models import AIConfig
from ..rules.position import Move, Position


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(self, config: AIConfig):
        """
        Initialize AI player

        Args:
            config: AI configuration settings
        """
        self.config = config
        self.move_count = 0

        # Per-instance RNG used for all tie-breaking. An explicit rng_seed
        # makes selection reproducible; otherwise seed from system entropy.
        self.rng_seed: Optional[int] = config.rng_seed
        self.rng: random.Random = random.Random(self.rng_seed)

    @abstractmethod
    def select_move(
        self,
        position: Position,
        moves: Optional[List[Move]] = None,
    ) -> Optional[Move]:
        """
        Select a move for the player to move in ``position``

        Args:
            position: Current position (not modified)
            moves: Candidate moves; defaults to all legal moves

        Returns:
            Selected move or None if no valid moves
        """
        pass

    def get_valid_moves(self, position: Position) -> List[Move]:
        """Get all legal moves for the player to move."""
        return position.legal_moves()

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        """
        Get random element from list using the per-instance RNG.

        Args:
            items: List of items

        Returns:
            Random item or None if list is empty
        """
        if not items:
            return None
        return self.rng.choice(items)

    def __repr__(self) -> str:
        """String representation of AI"""
        return (
            f"{self.__class__.__name__}"
            f"(strategy={self.config.strategy}, "
            f"seed={self.rng_seed})"
        )
