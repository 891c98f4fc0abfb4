"""
Gesture Controller
==================
Turns a pointer stream into carousel intents.

A pointer session (down ... up) is either a tap, a swipe or nothing:
- Tap: the pointer barely moved. Activates the focus card if it was hit.
- Swipe: net horizontal travel passed the drag threshold. Rotates the ring.
- Ignored: anything in between. The carousel springs back.

Usage:
    controller = GestureController(model, renderer.point_to_card_index, screen_width=1280)
    controller.on('card_activated', lambda card: print(f"Card {card}"))

    while running:
        for event in pointer_events:
            controller.handle_event(event)
        controller.update(delta_time)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

from .carousel_model import CarouselModel, CardTransform


class PointerPhase(Enum):
    """Phase of a pointer sample."""
    DOWN = auto()
    MOVE = auto()
    UP = auto()
    CANCEL = auto()


class GesturePhase(Enum):
    """Controller state."""
    IDLE = auto()
    DRAGGING = auto()


class GestureOutcome(Enum):
    """What a pointer event resolved to."""
    NONE = auto()
    TAP = auto()
    SWIPE = auto()
    IGNORED = auto()


@dataclass
class PointerEvent:
    """One sample from a mouse or touch device, in screen pixels."""
    phase: PointerPhase
    x: float
    y: float
    timestamp: float = 0.0
    pointer_id: int = 0


HitTest = Callable[[float, float], Optional[int]]


class GestureController:
    """
    Single-pointer drag/tap state machine driving a CarouselModel.

    Only the pointer that started a session is followed; samples from any
    other pointer are dropped until the session ends.
    """

    EVENTS = ('card_activated', 'shifted', 'drag_start', 'drag_end')

    def __init__(self, model: CarouselModel, hit_test: HitTest, screen_width: float):
        if screen_width <= 0:
            raise ValueError(f"screen_width must be positive, got {screen_width}")

        self.model = model
        self.hit_test = hit_test
        self.screen_width = float(screen_width)

        # Session state
        self.phase = GesturePhase.IDLE
        self.pointer_id: Optional[int] = None
        self.last_pos = 0.0
        self.delta_pos = 0.0       # Signed net travel since pointer down
        self.delta_pos_abs = 0.0   # Unsigned cumulative travel since pointer down

        self.last_outcome = GestureOutcome.NONE

        self._callbacks: Dict[str, List[Callable]] = {name: [] for name in self.EVENTS}

    @property
    def dragging(self) -> bool:
        return self.phase == GesturePhase.DRAGGING

    def on(self, event: str, callback: Callable):
        """
        Register a callback for an event.

        Events:
            - 'card_activated': callback(card_index) on a tap on the focus card
            - 'shifted': callback(right, order) after a swipe rotated the ring
            - 'drag_start': callback(x) when a pointer session begins
            - 'drag_end': callback(outcome) when a pointer session ends
        """
        if event in self._callbacks:
            self._callbacks[event].append(callback)

    def _emit(self, event: str, *args):
        for callback in self._callbacks.get(event, []):
            callback(*args)

    # =====================
    # INPUT
    # =====================
    def handle_event(self, event: PointerEvent) -> GestureOutcome:
        """Feed one pointer sample. Returns the outcome it produced."""
        if event.phase == PointerPhase.DOWN:
            if self.dragging:
                return GestureOutcome.NONE
            self._begin(event)
            return GestureOutcome.NONE

        if not self.dragging or event.pointer_id != self.pointer_id:
            return GestureOutcome.NONE

        self._accumulate(event.x)

        if event.phase == PointerPhase.MOVE:
            return GestureOutcome.NONE

        return self._finish(event)

    def _begin(self, event: PointerEvent):
        self.phase = GesturePhase.DRAGGING
        self.pointer_id = event.pointer_id
        self.last_pos = event.x
        self.delta_pos = 0.0
        self.delta_pos_abs = 0.0
        self._emit('drag_start', event.x)

    def _accumulate(self, x: float):
        step = x - self.last_pos
        self.delta_pos += step
        self.delta_pos_abs += abs(step)
        self.last_pos = x

    def _finish(self, event: PointerEvent) -> GestureOutcome:
        self.phase = GesturePhase.IDLE
        self.pointer_id = None

        outcome = self.classify()
        if outcome == GestureOutcome.TAP:
            card = self.hit_test(event.x, event.y)
            if card is not None and card == self.model.focus_card:
                self._emit('card_activated', card)
        elif outcome == GestureOutcome.SWIPE:
            right = self.delta_pos > 0
            order = self.model.shift(right)
            self._emit('shifted', right, order)

        self.last_outcome = outcome
        self._emit('drag_end', outcome)
        return outcome

    def classify(self) -> GestureOutcome:
        """Classify the current (or just finished) session from its deltas."""
        travel = self.delta_pos_abs / self.screen_width * self.model.pitch
        if travel < self.model.config.tap_cutoff:
            return GestureOutcome.TAP
        if abs(self.delta_pos / self.screen_width) >= self.model.config.drag_threshold:
            return GestureOutcome.SWIPE
        return GestureOutcome.IGNORED

    def reset(self):
        """Abandon the current session without classifying it."""
        self.phase = GesturePhase.IDLE
        self.pointer_id = None
        self.delta_pos = 0.0
        self.delta_pos_abs = 0.0

    # =====================
    # FRAME
    # =====================
    @property
    def drag_offset(self) -> float:
        """World-space offset the live drag maps to."""
        if not self.dragging:
            return 0.0
        return self.delta_pos / self.screen_width * self.model.pitch

    def update(self, delta_time: float) -> List[CardTransform]:
        """Advance the carousel one frame. Call after handling input."""
        return self.model.displace(self.drag_offset, delta_time)
