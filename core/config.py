"""
Carousel Configuration
======================
Construction-time parameters for the carousel and its gesture controller.

Ranged values are clamped into their documented range, the same way a
ranged inspector field would behave. Values that cannot be clamped into
anything meaningful (NaN, infinities, negative rates) are rejected.
"""

import math
from dataclasses import dataclass
from typing import Tuple


def _clamp(value: float, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    return value


@dataclass
class CarouselConfig:
    """Settings for carousel layout and gesture interpretation."""

    GAP_FRACTION_RANGE = (0.0, 1.0)
    SCALE_OCCLUSION_RANGE = (0.5, 1.0)
    DRAG_THRESHOLD_RANGE = (0.05, 0.5)

    gap_fraction: float = 0.2          # Gap between cards, fraction of card width
    scale_occlusion: float = 0.8       # Minimum scale of side cards
    drag_threshold: float = 0.25       # Drag needed to shift, fraction of screen width
    carousel_height: float = 0.0       # y of the resting row
    initial_focus_index: int = 0       # Card placed in the focus slot at startup
    smoothing_rate: float = 10.0       # Catch-up rate per second toward target
    tap_cutoff: float = 0.1            # Max travel (world units) still counted as a tap

    def __post_init__(self):
        self.gap_fraction = _clamp(
            _require_finite("gap_fraction", self.gap_fraction), self.GAP_FRACTION_RANGE)
        self.scale_occlusion = _clamp(
            _require_finite("scale_occlusion", self.scale_occlusion), self.SCALE_OCCLUSION_RANGE)
        self.drag_threshold = _clamp(
            _require_finite("drag_threshold", self.drag_threshold), self.DRAG_THRESHOLD_RANGE)
        self.carousel_height = _require_finite("carousel_height", self.carousel_height)

        self.smoothing_rate = _require_finite("smoothing_rate", self.smoothing_rate)
        if self.smoothing_rate < 0:
            raise ValueError(f"smoothing_rate must be >= 0, got {self.smoothing_rate}")

        self.tap_cutoff = _require_finite("tap_cutoff", self.tap_cutoff)
        if self.tap_cutoff <= 0:
            raise ValueError(f"tap_cutoff must be > 0, got {self.tap_cutoff}")

        if isinstance(self.initial_focus_index, bool) or not isinstance(self.initial_focus_index, int):
            raise ValueError(
                f"initial_focus_index must be an integer, got {self.initial_focus_index!r}")
