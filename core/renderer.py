"""
Renderer Interface
==================
The host-side collaborator the carousel talks to.

The carousel never draws anything itself. It measures cards, pushes
transforms and asks which card sits under a screen point, all through
this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple


class CardRenderer(ABC):
    """
    Base class for anything that can display carousel cards.

    Cards are identified by their index (0..N-1). Implementations own the
    visuals and must only apply the transforms they are given.
    """

    @abstractmethod
    def get_card_bounds(self, card_index: int) -> Tuple[float, float]:
        """Return (width, height) of a card in world units."""
        pass

    @abstractmethod
    def set_card_transform(self, card_index: int, position: Tuple[float, float], scale: float):
        """Apply a world position and uniform scale to a card."""
        pass

    @abstractmethod
    def point_to_card_index(self, screen_x: float, screen_y: float) -> Optional[int]:
        """Return the card under a screen point, or None."""
        pass
