"""
Display Module
==============
Pygame-based window that renders carousel cards and feeds pointer input.

Implements CardRenderer, so the carousel can measure, place and hit-test
cards without knowing about pygame. Mouse and touch input are both
translated into PointerEvents here; nothing downstream sees the device.
"""

import pygame
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .gesture_controller import PointerEvent, PointerPhase
from .renderer import CardRenderer


MOUSE_POINTER_ID = -1


@dataclass
class DisplaySettings:
    """Settings for the window."""
    resolution: Tuple[int, int] = (1280, 720)
    title: str = "Card Carousel"
    fullscreen: bool = False
    background: Tuple[int, int, int] = (24, 24, 30)
    max_fps: int = 60                     # 0 for uncapped
    pixels_per_unit: float = 100.0        # Screen pixels per world unit


@dataclass
class _Card:
    surface: pygame.Surface
    size: Tuple[int, int]
    position: Tuple[float, float] = (0.0, 0.0)
    scale: float = 1.0


class CarouselDisplay(CardRenderer):
    """
    Pygame display for the carousel.

    World space has its origin at the centre of the window with y pointing
    up, scaled by settings.pixels_per_unit. Card sizes are given in pixels
    and reported to the carousel in world units; positions are card centres.
    """

    def __init__(self, settings: Optional[DisplaySettings] = None):
        self.settings = settings or DisplaySettings()
        if self.settings.pixels_per_unit <= 0:
            raise ValueError(f"pixels_per_unit must be positive, got {self.settings.pixels_per_unit}")
        self.pixels_per_unit = float(self.settings.pixels_per_unit)

        pygame.init()
        pygame.display.set_caption(self.settings.title)

        info = pygame.display.Info()
        self.screen_width = info.current_w
        self.screen_height = info.current_h
        self._fullscreen = self.settings.fullscreen
        self._running = True
        self._create_window(self._fullscreen)

        self.clock = pygame.time.Clock()
        self.actual_fps = 0.0

        self.font = pygame.font.Font(None, 48)
        self.small_font = pygame.font.Font(None, 22)

        self._cards: List[_Card] = []

    def _create_window(self, fullscreen: bool):
        """Create or recreate the window."""
        if fullscreen:
            self.screen = pygame.display.set_mode(
                (self.screen_width, self.screen_height),
                pygame.FULLSCREEN | pygame.DOUBLEBUF
            )
        else:
            self.screen = pygame.display.set_mode(
                self.settings.resolution,
                pygame.DOUBLEBUF | pygame.RESIZABLE
            )
        self.display_width, self.display_height = self.screen.get_size()
        self._fullscreen = fullscreen

    def toggle_fullscreen(self) -> bool:
        """Toggle between fullscreen and windowed mode."""
        self._create_window(not self._fullscreen)
        return self._fullscreen

    # =====================
    # CARDS
    # =====================
    def add_card(self, size: Tuple[int, int], color: pygame.Color, label: str) -> int:
        """Create a card visual from a pixel size. Returns its index."""
        width, height = size
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.draw.rect(surface, color, surface.get_rect(), border_radius=18)
        pygame.draw.rect(surface, (240, 240, 245), surface.get_rect(), width=3, border_radius=18)

        text = self.font.render(label, True, (20, 20, 25))
        surface.blit(text, text.get_rect(center=(width // 2, height // 2)))

        self._cards.append(_Card(surface=surface, size=(width, height)))
        return len(self._cards) - 1

    @property
    def card_count(self) -> int:
        return len(self._cards)

    def get_card_bounds(self, card_index: int) -> Tuple[float, float]:
        """Card size in world units."""
        width, height = self._cards[card_index].size
        return width / self.pixels_per_unit, height / self.pixels_per_unit

    def set_card_transform(self, card_index: int, position: Tuple[float, float], scale: float):
        card = self._cards[card_index]
        card.position = position
        card.scale = scale

    def _card_rect(self, card: _Card) -> pygame.Rect:
        width = max(1, int(card.size[0] * card.scale))
        height = max(1, int(card.size[1] * card.scale))
        rect = pygame.Rect(0, 0, width, height)
        rect.center = self.world_to_screen(*card.position)
        return rect

    def _draw_order(self) -> List[int]:
        """Smallest cards first so the focus card ends up on top."""
        return sorted(range(len(self._cards)), key=lambda i: self._cards[i].scale)

    def point_to_card_index(self, screen_x: float, screen_y: float) -> Optional[int]:
        """Topmost card under a screen point, tested in world space."""
        world_x, world_y = self.screen_to_world(screen_x, screen_y)

        for index in reversed(self._draw_order()):
            card = self._cards[index]
            half_w, half_h = (extent * card.scale / 2 for extent in self.get_card_bounds(index))
            card_x, card_y = card.position
            if abs(world_x - card_x) <= half_w and abs(world_y - card_y) <= half_h:
                return index
        return None

    # =====================
    # PROJECTION
    # =====================
    def world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        ppu = self.pixels_per_unit
        return (int(round(self.display_width / 2 + x * ppu)),
                int(round(self.display_height / 2 - y * ppu)))

    def screen_to_world(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        ppu = self.pixels_per_unit
        return ((screen_x - self.display_width / 2) / ppu,
                (self.display_height / 2 - screen_y) / ppu)

    # =====================
    # EVENTS
    # =====================
    def process_events(self) -> dict:
        """
        Process pygame events and return relevant events.

        Returns:
            Dictionary with:
            - 'quit': True if window should close
            - 'key_down': List of keys just pressed this frame
            - 'pointer': List of PointerEvents, in arrival order
            - 'resized': New size if window was resized, None otherwise
        """
        events = {
            'quit': False,
            'key_down': [],
            'pointer': [],
            'resized': None,
        }

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events['quit'] = True
                self._running = False

            elif event.type == pygame.KEYDOWN:
                events['key_down'].append(event.key)
                if event.key == pygame.K_F11:
                    self.toggle_fullscreen()

            elif event.type == pygame.VIDEORESIZE:
                self.display_width = event.w
                self.display_height = event.h
                events['resized'] = (event.w, event.h)

            else:
                pointer = self._to_pointer_event(event)
                if pointer is not None:
                    events['pointer'].append(pointer)

        return events

    def _to_pointer_event(self, event) -> Optional[PointerEvent]:
        """Translate a mouse or touch event. Returns None for anything else."""
        now = pygame.time.get_ticks() / 1000.0

        # Touch input also produces emulated mouse events; keep the finger ones
        if getattr(event, 'touch', False):
            return None

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return PointerEvent(PointerPhase.DOWN, *event.pos, now, MOUSE_POINTER_ID)
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            return PointerEvent(PointerPhase.UP, *event.pos, now, MOUSE_POINTER_ID)
        if event.type == pygame.MOUSEMOTION:
            return PointerEvent(PointerPhase.MOVE, *event.pos, now, MOUSE_POINTER_ID)

        touch_phases = {
            pygame.FINGERDOWN: PointerPhase.DOWN,
            pygame.FINGERMOTION: PointerPhase.MOVE,
            pygame.FINGERUP: PointerPhase.UP,
        }
        if event.type in touch_phases:
            # Finger coordinates are normalized 0-1
            return PointerEvent(
                touch_phases[event.type],
                event.x * self.display_width,
                event.y * self.display_height,
                now,
                event.finger_id,
            )

        if event.type == pygame.WINDOWLEAVE:
            mouse_x, mouse_y = pygame.mouse.get_pos()
            return PointerEvent(PointerPhase.CANCEL, mouse_x, mouse_y, now, MOUSE_POINTER_ID)

        return None

    # =====================
    # FRAME
    # =====================
    def draw_cards(self):
        """Clear the screen and draw every card at its current transform."""
        self.screen.fill(self.settings.background)

        for index in self._draw_order():
            card = self._cards[index]
            rect = self._card_rect(card)
            image = pygame.transform.smoothscale(card.surface, rect.size)
            self.screen.blit(image, rect)

    def draw_text(self, text: str, pos: Tuple[int, int], color=(180, 180, 180)):
        surface = self.small_font.render(text, True, color)
        self.screen.blit(surface, pos)

    def show(self):
        """Present the frame and cap the framerate."""
        pygame.display.flip()

        if self.settings.max_fps > 0:
            self.clock.tick(self.settings.max_fps)
        else:
            self.clock.tick()
        self.actual_fps = self.clock.get_fps()

    def get_fps(self) -> float:
        """Get the actual frames per second."""
        return self.actual_fps

    @property
    def running(self) -> bool:
        """Check if the display is still running (not closed)."""
        return self._running

    def close(self):
        """Close the display and clean up pygame."""
        self._running = False
        pygame.quit()


class Keys:
    """Pygame key constants for convenience."""
    ESCAPE = pygame.K_ESCAPE
    D = pygame.K_d
    Q = pygame.K_q
