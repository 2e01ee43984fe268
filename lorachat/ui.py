"""Touch-screen chat interface: keyboard, text entry, send button and history."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from lorachat.geometry import (
    Box,
    Point,
    Translation,
    box_intersect,
    inverse_translate,
    translate,
)
from lorachat.keyboard import (
    KEY_BORDER_COLOR,
    KEY_COLOR,
    KEY_TEXT_SIZE,
    KEY_WIDTH,
    NUMERIC,
    REGULAR,
    Keyboard,
    check_keypress,
    key_location,
)
from lorachat.messages import (
    LINE_WIDTH,
    MAX_MESSAGE_LENGTH,
    TEXT_BUFFER_LINES,
    ChatHistory,
    ChatMessage,
)

logger = logging.getLogger(__name__)

# RGB565 colours.
BLACK = 0x0000
BLUE = 0x001F
RED = 0xF800
GREEN = 0x07E0

TEXT_COLOR = RED
TEXT_SIZE = 2
PEN_RADIUS = 3
MIN_PRESSURE = 10
DEBOUNCE_DELAY_MS = 200
BACKSPACE = "<"
TO_NUMERIC = "#"
TO_REGULAR = "A"
SEND_LABEL = "SEND"


def scale(value: int, in_min: int, in_max: int, out_min: int, out_max: int) -> int:
    """Map ``value`` linearly from one range to another, truncating toward zero."""
    span = in_max - in_min
    if span == 0:
        raise ValueError("input range is empty")
    numerator = (value - in_min) * (out_max - out_min)
    quotient = abs(numerator) // abs(span)
    if (numerator < 0) != (span < 0):
        quotient = -quotient
    return quotient + out_min


class Canvas(ABC):
    """A drawing surface whose ``width`` and ``height`` follow its rotation."""

    width: int
    height: int

    @abstractmethod
    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Fill a rectangle."""

    @abstractmethod
    def draw_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Draw a rectangle outline."""

    @abstractmethod
    def draw_vline(self, x: int, y: int, h: int, color: int) -> None:
        """Draw a vertical line ``h`` pixels long."""

    @abstractmethod
    def fill_circle(self, x: int, y: int, r: int, color: int) -> None:
        """Fill a circle."""

    @abstractmethod
    def draw_text(self, x: int, y: int, text: str, size: int, color: int) -> None:
        """Draw ``text`` with its top left corner at (x, y)."""


class RecordingCanvas(Canvas):
    """A canvas that keeps a list of the drawing operations made on it."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.operations: list[tuple] = []

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        self.operations.append(("fill_rect", x, y, w, h, color))

    def draw_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        self.operations.append(("draw_rect", x, y, w, h, color))

    def draw_vline(self, x: int, y: int, h: int, color: int) -> None:
        self.operations.append(("draw_vline", x, y, h, color))

    def fill_circle(self, x: int, y: int, r: int, color: int) -> None:
        self.operations.append(("fill_circle", x, y, r, color))

    def draw_text(self, x: int, y: int, text: str, size: int, color: int) -> None:
        self.operations.append(("draw_text", x, y, text, size, color))


@dataclass(frozen=True)
class Calibration:
    """Raw touch-controller readings at the screen edges."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int


TSC2007_CALIBRATION = Calibration(min_x=300, max_x=3800, min_y=185, max_y=3700)
STMPE_CALIBRATION = Calibration(min_x=3800, max_x=100, min_y=100, max_y=3750)


@dataclass(frozen=True)
class _Element:
    obj: Box
    background: int
    location: Translation


class ChatScreen:
    """The chat user interface drawn on a canvas and driven by touches."""

    def __init__(
        self,
        participant: str,
        canvas: Canvas,
        calibration: Calibration = TSC2007_CALIBRATION,
        char_width: int = 12,
        char_height: int = 16,
    ) -> None:
        self.canvas = canvas
        self.calibration = calibration
        self.char_width = char_width
        self.char_height = char_height
        self.author = ChatMessage(participant).author
        self.text = ""
        self.history = ChatHistory()
        self.keyboard: Keyboard = REGULAR
        self.keyboard_location = Translation(10, KEY_WIDTH * 12)
        self.last_keypress_ms = 0

        text_height = TEXT_BUFFER_LINES * char_height
        self.text_area = _Element(
            Box(0, 0, canvas.width, text_height),
            BLUE,
            Translation(0, self.keyboard_location.y - text_height),
        )
        self.send_button = _Element(
            Box(0, 0, canvas.width, KEY_WIDTH),
            KEY_COLOR,
            Translation(0, self.text_area.location.y - KEY_WIDTH),
        )
        self.history_area = _Element(
            Box(0, 0, canvas.width, self.send_button.location.y),
            GREEN,
            Translation(0, 0),
        )

    def _clear(self, area: _Element) -> None:
        self.canvas.fill_rect(
            area.location.x, area.location.y, area.obj.w, area.obj.h, area.background
        )

    def _draw_send(self) -> None:
        button = self.send_button
        x, y, w, h = button.location.x, button.location.y, button.obj.w, button.obj.h
        self.canvas.fill_rect(x, y, w, h, button.background)
        self.canvas.draw_rect(x, y, w, h, KEY_BORDER_COLOR)
        self.canvas.draw_text(x + w // 3, y + h // 8, SEND_LABEL, KEY_TEXT_SIZE, TEXT_COLOR)

    def _cell(self, index: int) -> tuple[int, int]:
        row, col = divmod(index, LINE_WIDTH)
        return col * self.char_width, self.text_area.location.y + row * self.char_height

    def _draw_cursor(self, index: int, color: int) -> None:
        x, y = self._cell(index)
        self.canvas.draw_vline(x, y, self.char_height, color)

    def _erase_char(self, index: int) -> None:
        x, y = self._cell(index)
        self.canvas.fill_rect(
            x, y, self.char_width, self.char_height, self.text_area.background
        )

    def setup(self) -> None:
        """Draw the whole screen from scratch."""
        self.canvas.fill_rect(0, 0, self.canvas.width, self.canvas.height, BLACK)
        self._clear(self.text_area)
        self.draw_keyboard()
        self._draw_send()
        self._clear(self.history_area)

    def draw_keyboard(self) -> None:
        """Draw every key of the current keyboard."""
        for k in self.keyboard:
            corner = translate(key_location(k), self.keyboard_location)
            width = KEY_WIDTH * k.u
            self.canvas.fill_rect(corner.x, corner.y, width, KEY_WIDTH, KEY_COLOR)
            self.canvas.draw_rect(corner.x, corner.y, width, KEY_WIDTH, KEY_BORDER_COLOR)
            self.canvas.draw_text(
                corner.x + width // 4,
                corner.y + KEY_WIDTH // 8,
                k.key,
                KEY_TEXT_SIZE,
                TEXT_COLOR,
            )

    def update_chat_history(self) -> None:
        """Redraw the history area, newest message lowest."""
        self._clear(self.history_area)
        display_entry = self.history.size - 1
        for msg in self.history:
            y = self.char_height * display_entry * 3
            self.canvas.draw_text(0, y, msg.author, TEXT_SIZE, TEXT_COLOR)
            self.canvas.draw_text(
                0, y + self.char_height, msg.message, TEXT_SIZE, TEXT_COLOR
            )
            display_entry -= 1

    def _to_screen(self, raw_x: int, raw_y: int, pressure: int) -> Point:
        cal = self.calibration
        return Point(
            scale(raw_x, cal.max_x, cal.min_x, 0, self.canvas.width),
            scale(raw_y, cal.max_y, cal.min_y, 0, self.canvas.height),
            pressure,
        )

    def _press_key(self, char: str) -> int | None:
        """Apply a key press; return the text index to erase, if any."""
        if char == BACKSPACE:
            self.text = self.text[:-1]
            return len(self.text)
        if char == TO_NUMERIC and self.keyboard is REGULAR:
            self.keyboard = NUMERIC
            self.draw_keyboard()
        elif char == TO_REGULAR and self.keyboard is NUMERIC:
            self.keyboard = REGULAR
            self.draw_keyboard()
        elif len(self.text) < MAX_MESSAGE_LENGTH:
            self.text += char
        return None

    def touch(
        self, raw_x: int, raw_y: int, pressure: int, now_ms: int
    ) -> ChatMessage | None:
        """Handle one raw touch reading; return the message if one was sent."""
        if (raw_x == 0 and raw_y == 0) or pressure < MIN_PRESSURE:
            logger.debug("rejected point (%d, %d, %d)", raw_x, raw_y, pressure)
            return None
        if now_ms < self.last_keypress_ms + DEBOUNCE_DELAY_MS:
            logger.debug("rejecting duplicate keypress")
            return None
        self.last_keypress_ms = now_ms

        p = self._to_screen(raw_x, raw_y, pressure)
        k = check_keypress(inverse_translate(p, self.keyboard_location), self.keyboard)
        dirty = None
        if k is not None:
            logger.debug("pushed key %r", k.key)
            dirty = self._press_key(k.key)

        send_pushed = box_intersect(
            inverse_translate(p, self.send_button.location), self.send_button.obj
        )
        sent = None
        if send_pushed and self.text:
            sent = ChatMessage(self.author, self.text)
            self.history.record(sent)
            self.text = ""

        if p.y - PEN_RADIUS > 0 and p.y + PEN_RADIUS < self.canvas.height:
            self.canvas.fill_circle(p.x, p.y, PEN_RADIUS, BLUE)

        if dirty is not None:
            self._erase_char(dirty)
            self._draw_cursor(dirty + 1, self.text_area.background)
        if sent is not None:
            self._clear(self.text_area)
        self.canvas.draw_text(0, self.text_area.location.y, self.text, TEXT_SIZE, TEXT_COLOR)

        cursor = len(self.text)
        self._draw_cursor(max(0, cursor - 1), self.text_area.background)
        self._draw_cursor(cursor, TEXT_COLOR)

        if sent is not None:
            self.update_chat_history()
        return sent