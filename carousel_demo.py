"""
Card Carousel Demo
==================
Drag left/right to rotate the carousel, tap the centre card to activate it.

Controls:
- Drag (mouse or touch): rotate
- Tap centre card: activate
- D: Toggle debug overlay
- F11: Toggle fullscreen
- Q / ESC: Quit
"""

import random
import time
from typing import List, Tuple

import pygame

from core import CarouselConfig, CarouselModel, GestureController, GestureOutcome
from core.display import CarouselDisplay, DisplaySettings, Keys


CARD_COUNT = 7
CARD_SIZE = (220, 300)


# =====================
# DEBUG UI
# =====================
class DebugUI:
    """Debug overlay - toggle with D key."""

    def __init__(self):
        self.enabled = False
        self.events: List[Tuple[float, str]] = []

    def toggle(self):
        self.enabled = not self.enabled

    def log(self, msg: str, t: float):
        self.events.append((t, msg))
        if len(self.events) > 8:
            self.events.pop(0)

    def render(self, display: CarouselDisplay, controller: GestureController, t: float):
        if not self.enabled:
            return

        panel = pygame.Surface((280, 250), pygame.SRCALPHA)
        panel.fill((20, 20, 20, 205))
        display.screen.blit(panel, (10, 10))

        model = controller.model
        y = 20
        display.draw_text("DEBUG [D]", (20, y), (255, 255, 0))
        y += 25

        phase_col = (0, 255, 0) if controller.dragging else (140, 140, 140)
        display.draw_text(f"Phase: {controller.phase.name}", (20, y), phase_col)
        y += 20
        display.draw_text(f"Delta: {controller.delta_pos:+.1f}  Abs: {controller.delta_pos_abs:.1f}", (20, y))
        y += 20
        display.draw_text(f"Offset: {controller.drag_offset:+.1f}", (20, y))
        y += 20
        display.draw_text(f"Order: {model.order}", (20, y))
        y += 20
        display.draw_text(f"Focus: {model.focus_card}", (20, y))
        y += 20
        display.draw_text(f"FPS: {display.get_fps():.0f}", (20, y))
        y += 28

        display.draw_text("Events:", (20, y), (200, 200, 200))
        y += 18

        for evt_t, evt_msg in reversed(self.events[-4:]):
            age = t - evt_t
            alpha = max(0.3, 1.0 - age / 3.0)
            col = tuple(int(c * alpha) for c in (150, 255, 150))
            display.draw_text(f"  {evt_msg}", (20, y), col)
            y += 16


# =====================
# APP
# =====================
class CarouselApp:
    """Wires the display, the carousel model and the gesture controller."""

    def __init__(self, card_count: int = CARD_COUNT, config: CarouselConfig = None,
                 settings: DisplaySettings = None):
        self.display = CarouselDisplay(settings)
        self.config = config or CarouselConfig()

        for i in range(card_count):
            color = pygame.Color(0)
            color.hsva = (random.uniform(0, 360), random.uniform(0, 100), random.uniform(50, 100), 100)
            self.display.add_card(CARD_SIZE, color, str(i))

        self.model = CarouselModel(self.config, self.display)
        self.model.initialize(self.display.card_count)

        self.controller = GestureController(
            self.model,
            self.display.point_to_card_index,
            screen_width=self.display.display_width,
        )
        self.controller.on('card_activated', self.on_card_activated)
        self.controller.on('shifted', self.on_shifted)
        self.controller.on('drag_end', self.on_drag_end)

        self.debug = DebugUI()

    def on_card_activated(self, card_index: int):
        print(f"Activated card number {card_index}")
        self.debug.log(f"TAP card {card_index}", time.time())

    def on_shifted(self, right: bool, order: List[int]):
        print(f"Shift {'right' if right else 'left'}: {order}")
        self.debug.log(f"SHIFT {'RIGHT' if right else 'LEFT'}", time.time())

    def on_drag_end(self, outcome: GestureOutcome):
        if outcome == GestureOutcome.IGNORED:
            self.debug.log("SPRING BACK", time.time())

    def run(self):
        last_time = time.time()

        try:
            while self.display.running:
                now = time.time()
                delta_time = now - last_time
                last_time = now

                events = self.display.process_events()
                if events['quit']:
                    break

                if Keys.D in events['key_down']:
                    self.debug.toggle()
                    print(f"Debug overlay: {'ON' if self.debug.enabled else 'OFF'}")
                if Keys.Q in events['key_down'] or Keys.ESCAPE in events['key_down']:
                    break

                # Input strictly before geometry
                for pointer in events['pointer']:
                    self.controller.handle_event(pointer)
                self.controller.update(delta_time)

                self.display.draw_cards()
                self.debug.render(self.display, self.controller, now)
                self.display.show()
        finally:
            self.display.close()


def main():
    print("=" * 50)
    print("CARD CAROUSEL")
    print("=" * 50)
    print("Controls:")
    print("  • Drag left/right: Rotate carousel")
    print("  • Tap centre card: Activate")
    print("  • D: Toggle debug overlay")
    print("  • F11: Toggle fullscreen")
    print("  • Q / ESC: Quit")
    print("=" * 50)

    CarouselApp().run()


if __name__ == "__main__":
    main()
