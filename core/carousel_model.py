"""
Carousel Model
==============
Ring ordering and layout for a horizontal card carousel.

Cards sit in N slots laid out left to right. The slot in the middle
(N // 2) is the focus slot. Rotating the carousel rewrites the slot order;
the card that wraps around is teleported to the opposite end and eased
into place from there, so no card ever animates across the whole ring.

Usage:
    model = CarouselModel(config, renderer)
    model.initialize(card_count=5, focus_index=0)

    while running:
        model.displace(drag_offset, delta_time)
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import CarouselConfig
from .renderer import CardRenderer


@dataclass
class CardTransform:
    """Position and scale computed for one card on one frame."""
    card_index: int
    position: Tuple[float, float]
    scale: float


class CarouselModel:
    """
    Owns the slot -> card mapping and the geometry derived from it.

    Positions are held per card (not per slot) so that a card keeps its
    on-screen location when the ring order changes under it.
    """

    def __init__(self, config: Optional[CarouselConfig] = None, renderer: Optional[CardRenderer] = None):
        self.config = config or CarouselConfig()
        self.renderer = renderer

        self._order: Optional[np.ndarray] = None
        self._positions: Optional[np.ndarray] = None  # (N, 2), indexed by card
        self._scales: Optional[np.ndarray] = None     # (N,), indexed by card
        self._rest_x: Optional[np.ndarray] = None     # (N,), indexed by slot

        self.card_size: Tuple[float, float] = (0.0, 0.0)
        self.gap = 0.0
        self.start_pos_x = 0.0

    # =====================
    # SETUP
    # =====================
    def initialize(self, card_count: int, focus_index: Optional[int] = None) -> List[int]:
        """
        Build the ring order and place every card at rest.

        Args:
            card_count: Number of cards (must be at least 1)
            focus_index: Card to put in the focus slot. Wraps modulo
                card_count. Defaults to config.initial_focus_index.

        Returns:
            The ring order as a list (slot -> card index)
        """
        if card_count <= 0:
            raise ValueError(f"Carousel needs at least one card, got {card_count}")
        if focus_index is None:
            focus_index = self.config.initial_focus_index
        if isinstance(focus_index, bool) or not isinstance(focus_index, int):
            raise ValueError(f"focus_index must be an integer, got {focus_index!r}")

        n = card_count
        center_offset = n // 2

        order = np.empty(n, dtype=int)
        for i in range(n):
            order[(i + center_offset) % n] = (i + focus_index) % n
        self._order = order

        width, height = self._measure_card()
        self.card_size = (width, height)
        self.gap = width * self.config.gap_fraction
        self.start_pos_x = -center_offset * self.pitch
        self._rest_x = self.start_pos_x + np.arange(n) * self.pitch

        self._positions = np.zeros((n, 2), dtype=float)
        self._positions[order, 0] = self._rest_x
        self._positions[:, 1] = self.config.carousel_height
        self._scales = np.empty(n, dtype=float)
        self._scales[order] = self._scales_for(self._rest_x)

        self._report(order)
        return self.order

    def _measure_card(self) -> Tuple[float, float]:
        if self.renderer is None:
            return (1.0, 1.0)

        width, height = self.renderer.get_card_bounds(0)
        if width <= 0 or height <= 0:
            raise ValueError(f"Card bounds must be positive, got ({width}, {height})")
        return float(width), float(height)

    # =====================
    # LAYOUT
    # =====================
    @property
    def pitch(self) -> float:
        """Distance between two neighbouring slots."""
        return self.card_size[0] + self.gap

    def compute_scale(self, x: float) -> float:
        """
        Scale for a card resting at world x.

        Shrinks linearly with distance from the centre, 1.0 at x=0 and
        never below scale_occlusion.
        """
        return float(self._scales_for(np.asarray(x, dtype=float)))

    def _scales_for(self, xs: np.ndarray) -> np.ndarray:
        occlusion = self.config.scale_occlusion
        pitch = self.pitch
        if pitch <= 0:
            return np.ones_like(xs)
        scales = 1.0 - np.abs(xs) / pitch * (1.0 - occlusion)
        return np.clip(scales, occlusion, 1.0)

    def displace(self, offset: float, delta_time: float) -> List[CardTransform]:
        """
        Ease every card toward its slot, shifted by offset.

        Called once per frame, with the live drag offset while dragging
        and 0 at rest.

        Returns:
            The transforms applied this frame, in slot order
        """
        self._require_initialized()

        alpha = min(1.0, max(0.0, self.config.smoothing_rate * delta_time))
        order = self._order

        targets_x = self._rest_x + offset
        current = self._positions[order]
        current[:, 0] += (targets_x - current[:, 0]) * alpha
        current[:, 1] += (self.config.carousel_height - current[:, 1]) * alpha
        self._positions[order] = current
        self._scales[order] = self._scales_for(targets_x)

        return self._report(order)

    def _report(self, order: np.ndarray) -> List[CardTransform]:
        transforms = []
        for card in order:
            card = int(card)
            x, y = self._positions[card]
            transform = CardTransform(card, (float(x), float(y)), float(self._scales[card]))
            transforms.append(transform)
            if self.renderer is not None:
                self.renderer.set_card_transform(card, transform.position, transform.scale)
        return transforms

    # =====================
    # ROTATION
    # =====================
    def shift(self, right: bool) -> List[int]:
        """
        Rotate the ring by one slot.

        right=True moves the last slot's card to the front, right=False
        moves the first slot's card to the back. The wrapping card is
        placed where the card at the other end currently is; the next
        displace() eases it into its new slot.

        Returns:
            The new ring order
        """
        self._require_initialized()

        if len(self._order) <= 1:
            return self.order

        previous = self._order.copy()
        if right:
            self._order = np.roll(previous, 1)
            self._positions[previous[-1]] = self._positions[previous[0]]
        else:
            self._order = np.roll(previous, -1)
            self._positions[previous[0]] = self._positions[previous[-1]]

        return self.order

    # =====================
    # QUERIES
    # =====================
    @property
    def initialized(self) -> bool:
        return self._order is not None

    @property
    def card_count(self) -> int:
        return 0 if self._order is None else len(self._order)

    @property
    def focus_slot(self) -> int:
        return self.card_count // 2

    @property
    def focus_card(self) -> Optional[int]:
        """Card currently in the focus slot."""
        if not self.initialized:
            return None
        return int(self._order[self.focus_slot])

    @property
    def order(self) -> List[int]:
        """Copy of the ring order (slot -> card)."""
        if self._order is None:
            return []
        return [int(card) for card in self._order]

    def slot_of(self, card_index: int) -> int:
        """Slot currently holding a card."""
        self._require_initialized()
        matches = np.flatnonzero(self._order == card_index)
        if len(matches) == 0:
            raise ValueError(f"Card {card_index} not found")
        return int(matches[0])

    def rest_x(self, slot: int) -> float:
        """Resting x of a slot."""
        self._require_initialized()
        return float(self._rest_x[slot])

    def position_of(self, card_index: int) -> Tuple[float, float]:
        self._require_initialized()
        x, y = self._positions[card_index]
        return float(x), float(y)

    def scale_of(self, card_index: int) -> float:
        self._require_initialized()
        return float(self._scales[card_index])

    def is_at_rest(self, tolerance: float = 1e-3) -> bool:
        """True when every card sits on its slot's resting position."""
        if not self.initialized:
            return True
        current = self._positions[self._order]
        return bool(
            np.allclose(current[:, 0], self._rest_x, atol=tolerance)
            and np.allclose(current[:, 1], self.config.carousel_height, atol=tolerance)
        )

    def _require_initialized(self):
        if self._order is None:
            raise RuntimeError("Carousel has not been initialized")
