"""Shared pytest fixtures for carousel tests."""

from typing import Dict, List, Optional, Tuple

import pytest

from core import CardRenderer, CarouselConfig, CarouselModel, GestureController


SCREEN_WIDTH = 1200.0
CARD_BOUNDS = (100.0, 150.0)


class FakeRenderer(CardRenderer):
    """Records every transform it receives and resolves hits from a lookup."""

    def __init__(self, bounds: Tuple[float, float] = CARD_BOUNDS):
        self.bounds = bounds
        self.bounds_requests: List[int] = []
        self.transforms: Dict[int, Tuple[Tuple[float, float], float]] = {}
        self.transform_calls = 0
        self.hit: Optional[int] = None
        self.hit_requests: List[Tuple[float, float]] = []

    def get_card_bounds(self, card_index: int) -> Tuple[float, float]:
        self.bounds_requests.append(card_index)
        return self.bounds

    def set_card_transform(self, card_index: int, position: Tuple[float, float], scale: float):
        self.transforms[card_index] = (position, scale)
        self.transform_calls += 1

    def point_to_card_index(self, screen_x: float, screen_y: float) -> Optional[int]:
        self.hit_requests.append((screen_x, screen_y))
        return self.hit


@pytest.fixture
def renderer() -> FakeRenderer:
    """Provide a renderer with 100x150 cards and no card under the pointer."""
    return FakeRenderer()


@pytest.fixture
def config() -> CarouselConfig:
    """Provide the default configuration."""
    return CarouselConfig()


@pytest.fixture
def model(config: CarouselConfig, renderer: FakeRenderer) -> CarouselModel:
    """Provide a five-card carousel focused on card 0.

    With 100-wide cards and the default 0.2 gap the slot pitch is 120.
    """
    carousel = CarouselModel(config, renderer)
    carousel.initialize(5, 0)
    return carousel


@pytest.fixture
def controller(model: CarouselModel, renderer: FakeRenderer) -> GestureController:
    """Provide a controller on a 1200 pixel wide viewport."""
    return GestureController(model, renderer.point_to_card_index, SCREEN_WIDTH)
