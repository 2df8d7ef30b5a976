"""Single-line text input box with cursor, focus handling and password masking."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Optional


class Key(IntEnum):
    """Keyboard codes understood by :class:`TextBox`."""

    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 9  # noqa: E741
    J = 10
    K = 11
    L = 12
    M = 13
    N = 14
    O = 15  # noqa: E741
    P = 16
    Q = 17
    R = 18
    S = 19
    T = 20
    U = 21
    V = 22
    W = 23
    X = 24
    Y = 25
    Z = 26
    BACKSPACE = 63
    ENTER = 67
    DELETE = 77
    HOME = 78
    END = 79
    LEFT = 82
    RIGHT = 83


Color = tuple[int, int, int, int]


class TextBox:
    """An editable box of lower-case letters with a blinking cursor."""

    CURSOR_BLINK_PERIOD = 0.5

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        font_name: str = "romulus.ttf",
        font_size: int = 24,
        placeholder: str = "",
    ) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.font_name = font_name
        self.font_size = font_size
        self.placeholder = placeholder
        self.is_focused = False
        self.is_active = True
        self.max_length = 16
        self.cursor_position = 0
        self.cursor_blink_time = 0.0
        self.show_cursor = True
        self.border_width = 2.0
        self.text_color: Color = (255, 255, 255, 255)
        self.background_color: Color = (40, 40, 40, 200)
        self.border_color: Color = (100, 100, 100, 255)
        self.focused_border_color: Color = (0, 150, 255, 255)
        self.placeholder_color: Color = (150, 150, 150, 255)
        self.on_text_changed: Optional[Callable[[str], None]] = None
        self.on_enter_pressed: Optional[Callable[[], None]] = None
        self.on_focus_gained: Optional[Callable[[], None]] = None
        self.on_focus_lost: Optional[Callable[[], None]] = None
        self._text = ""
        self._password = False
        self.display_text = ""

    @property
    def text(self) -> str:
        """The current content of the box."""
        return self._text

    @property
    def password_mode(self) -> bool:
        """Whether the content is shown masked with asterisks."""
        return self._password

    @password_mode.setter
    def password_mode(self, enabled: bool) -> None:
        self._password = enabled
        self._update_display_text()

    @property
    def shown_text(self) -> str:
        """What the box shows: the placeholder, or the (possibly masked) text."""
        if not self._text and not self.is_focused:
            return self.placeholder
        return self.display_text if self._password else self._text

    @property
    def current_border_color(self) -> Color:
        return self.focused_border_color if self.is_focused else self.border_color

    def update(self, delta_time: float) -> None:
        """Advance the cursor blink timer."""
        if not self.is_active or not self.is_focused:
            return
        self.cursor_blink_time += delta_time
        if self.cursor_blink_time >= self.CURSOR_BLINK_PERIOD:
            self.show_cursor = not self.show_cursor
            self.cursor_blink_time = 0.0

    def handle_mouse_click(self, mouse_x: float, mouse_y: float) -> bool:
        """Focus or unfocus on a click; return whether the click was inside."""
        if not self.is_active:
            return False
        inside = self.contains(mouse_x, mouse_y)
        if inside and not self.is_focused:
            self.set_focus(True)
            return True
        if not inside and self.is_focused:
            self.set_focus(False)
            return False
        return inside

    def handle_key_press(self, keycode: int) -> bool:
        """Handle an editing or navigation key; return whether it was consumed."""
        if not self.is_focused or not self.is_active:
            return False
        if keycode == Key.LEFT:
            self._move_cursor(-1)
        elif keycode == Key.RIGHT:
            self._move_cursor(1)
        elif keycode == Key.HOME:
            self.cursor_position = 0
        elif keycode == Key.END:
            self.cursor_position = len(self._text)
        elif keycode == Key.BACKSPACE:
            self._delete_before_cursor()
        elif keycode == Key.DELETE:
            self._delete_at_cursor()
        elif keycode == Key.ENTER:
            if self.on_enter_pressed:
                self.on_enter_pressed()
        else:
            return False
        return True

    def handle_char_input(self, ch: int) -> bool:
        """Insert the letter for a letter key code; return whether it was inserted."""
        if not self.is_focused or not self.is_active:
            return False
        if Key.A <= ch <= Key.Z and len(self._text) < self.max_length:
            self._insert_at_cursor(chr(ch + ord("a") - 1))
            return True
        return False

    def set_focus(self, focused: bool) -> None:
        if self.is_focused == focused:
            return
        self.is_focused = focused
        self.cursor_blink_time = 0.0
        self.show_cursor = True
        if focused:
            self.cursor_position = len(self._text)
            if self.on_focus_gained:
                self.on_focus_gained()
        elif self.on_focus_lost:
            self.on_focus_lost()

    def lose_focus(self) -> None:
        self.set_focus(False)

    def set_text(self, new_text: str) -> None:
        """Replace the content, truncated to ``max_length``."""
        self._text = new_text[: self.max_length]
        self.cursor_position = min(self.cursor_position, len(self._text))
        self._update_display_text()
        self._notify_changed()

    def contains(self, point_x: float, point_y: float) -> bool:
        return (
            self.x <= point_x <= self.x + self.width
            and self.y <= point_y <= self.y + self.height
        )

    def _notify_changed(self) -> None:
        if self.on_text_changed:
            self.on_text_changed(self._text)

    def _update_display_text(self) -> None:
        self.display_text = "*" * len(self._text) if self._password else self._text

    def _move_cursor(self, direction: int) -> None:
        self.cursor_position = max(
            0, min(self.cursor_position + direction, len(self._text))
        )

    def _insert_at_cursor(self, char: str) -> None:
        if len(self._text) >= self.max_length:
            return
        pos = self.cursor_position
        self._text = self._text[:pos] + char + self._text[pos:]
        self.cursor_position += 1
        self._update_display_text()
        self._notify_changed()

    def _delete_at_cursor(self) -> None:
        pos = self.cursor_position
        if pos < len(self._text):
            self._text = self._text[:pos] + self._text[pos + 1:]
            self._update_display_text()
            self._notify_changed()

    def _delete_before_cursor(self) -> None:
        pos = self.cursor_position
        if pos > 0:
            self._text = self._text[: pos - 1] + self._text[pos:]
            self.cursor_position -= 1
            self._update_display_text()
            self._notify_changed()