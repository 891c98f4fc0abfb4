"""
Core components for the card carousel.
"""

from .config import CarouselConfig
from .carousel_model import CardTransform, CarouselModel
from .gesture_controller import (
    GestureController,
    GestureOutcome,
    GesturePhase,
    PointerEvent,
    PointerPhase,
)
from .renderer import CardRenderer

__all__ = [
    'CardRenderer',
    'CardTransform',
    'CarouselConfig',
    'CarouselModel',
    'GestureController',
    'GestureOutcome',
    'GesturePhase',
    'PointerEvent',
    'PointerPhase',
]
