"""Basic UI widgets: static images, image buttons, labels and a slider."""

from __future__ import annotations

from typing import Callable, Optional

HitTest = Callable[[float, float], bool]


class Image:
    """A static image placed at a position with an anchor.

    ``bitmap_size`` is the pixel size of the source image; it is needed
    unless both ``w`` and ``h`` are given, in which case the image is
    loaded scaled to exactly that size.
    """

    def __init__(
        self,
        img: str,
        x: float,
        y: float,
        w: float = 0,
        h: float = 0,
        anchor_x: float = 0,
        anchor_y: float = 0,
        *,
        bitmap_size: Optional[tuple[int, int]] = None,
    ) -> None:
        self.img = img
        self.x = float(x)
        self.y = float(y)
        self.width = float(w)
        self.height = float(h)
        self.anchor_x = float(anchor_x)
        self.anchor_y = float(anchor_y)
        if self.width != 0 and self.height != 0:
            self.bitmap_width, self.bitmap_height = int(w), int(h)
            return
        if bitmap_size is None:
            raise ValueError(f"bitmap size of {img!r} is needed to size the image")
        bitmap_width, bitmap_height = bitmap_size
        if bitmap_width <= 0 or bitmap_height <= 0:
            raise ValueError(f"invalid bitmap size {bitmap_size!r} for {img!r}")
        self.bitmap_width, self.bitmap_height = bitmap_width, bitmap_height
        if self.width == 0 and self.height == 0:
            self.width, self.height = float(bitmap_width), float(bitmap_height)
        elif self.width == 0:
            self.width = bitmap_width * self.height / bitmap_height
        else:
            self.height = bitmap_height * self.width / bitmap_width

    def top_left(self) -> tuple[float, float]:
        """Screen position of the image's top-left corner."""
        return (
            self.x - self.anchor_x * self.bitmap_width,
            self.y - self.anchor_y * self.bitmap_height,
        )


class ImageButton(Image):
    """A clickable image that swaps to ``img_in`` while hovered and enabled.

    ``hit_test`` receives a point in bitmap pixels and decides whether it is
    on the button; by default every pixel of the bitmap counts.
    """

    def __init__(
        self,
        img: str,
        img_in: str,
        x: float,
        y: float,
        w: float = 0,
        h: float = 0,
        anchor_x: float = 0,
        anchor_y: float = 0,
        *,
        bitmap_size: tuple[int, int],
        mouse: Optional[tuple[float, float]] = None,
        hit_test: Optional[HitTest] = None,
    ) -> None:
        super().__init__(img, x, y, w, h, anchor_x, anchor_y, bitmap_size=bitmap_size)
        self.img_out = img
        self.img_in = img_in
        self.enabled = True
        self._hit_test = hit_test
        self._on_click: Optional[Callable[[], None]] = None
        self.mouse_in = mouse is not None and self._hits(*mouse)
        # The hover and rest images are held at their natural size.
        self.bitmap_width, self.bitmap_height = bitmap_size
        self._refresh_image()

    def set_on_click(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_click = callback

    def on_mouse_down(self, button: int, mx: float, my: float) -> None:
        if button & 1 and self.mouse_in and self.enabled and self._on_click:
            self._on_click()

    def on_mouse_move(self, mx: float, my: float) -> None:
        self.mouse_in = self._hits(mx, my)
        self._refresh_image()

    def _refresh_image(self) -> None:
        self.current_image = (
            self.img_in if self.mouse_in and self.enabled else self.img_out
        )

    def _hits(self, mx: float, my: float) -> bool:
        bw, bh = self.bitmap_width, self.bitmap_height
        px = (mx - self.x) * bw / self.width + self.anchor_x * bw
        py = (my - self.y) * bh / self.height + self.anchor_y * bh
        if self._hit_test is not None:
            return self._hit_test(px, py)
        return 0 <= px < bw and 0 <= py < bh


class Label:
    """A piece of text drawn in a font at an anchored position."""

    def __init__(
        self,
        text: str,
        font: str,
        font_size: int,
        x: float,
        y: float,
        r: int = 0,
        g: int = 0,
        b: int = 0,
        a: int = 255,
        anchor_x: float = 0,
        anchor_y: float = 0,
    ) -> None:
        self.text = text
        self.font = font
        self.font_size = font_size
        self.x = float(x)
        self.y = float(y)
        self.color = (r, g, b, a)
        self.anchor_x = float(anchor_x)
        self.anchor_y = float(anchor_y)

    def draw_origin(self, text_width: float, text_height: float) -> tuple[float, float]:
        """Where the text starts, given its rendered width and line height."""
        return (
            self.x - self.anchor_x * text_width,
            self.y - self.anchor_y * text_height,
        )


class Slider(ImageButton):
    """A horizontal slider whose knob can be dragged along a bar.

    ``knob_size`` and ``end_size`` are the pixel sizes of the knob and of
    the bar-end images; the ends default to the knob's size.
    """

    MIN = 0.0
    MAX = 1.0

    def __init__(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        *,
        knob_size: tuple[int, int],
        end_size: Optional[tuple[int, int]] = None,
        mouse: Optional[tuple[float, float]] = None,
    ) -> None:
        super().__init__(
            "clickable/slider.png",
            "clickable/slider-blue.png",
            x,
            y,
            bitmap_size=knob_size,
            mouse=mouse,
        )
        end_size = end_size or knob_size
        self.bar = Image("clickable/bar.png", x, y, w, h)
        self.ends = (
            Image("clickable/end.png", x, y + h / 2, 0, 0, 0.5, 0.5, bitmap_size=end_size),
            Image("clickable/end.png", x + w, y + h / 2, 0, 0, 0.5, 0.5, bitmap_size=end_size),
        )
        self.x += w
        self.y += h / 2
        self.anchor_x = self.anchor_y = 0.5
        self.down = False
        self.value = self.MAX
        self._on_value_changed: Optional[Callable[[float], None]] = None

    def set_on_value_changed(self, callback: Optional[Callable[[float], None]]) -> None:
        self._on_value_changed = callback

    def set_value(self, value: float) -> None:
        """Move the knob to ``value`` (0 at the left end, 1 at the right)."""
        self.value = value
        self.x = self.bar.x + value * self.bar.width
        if self._on_value_changed:
            self._on_value_changed(value)

    def on_mouse_down(self, button: int, mx: float, my: float) -> None:
        if button & 1 and self.mouse_in:
            self.down = True

    def on_mouse_up(self, button: int, mx: float, my: float) -> None:
        self.down = False

    def on_mouse_move(self, mx: float, my: float) -> None:
        super().on_mouse_move(mx, my)
        if self.down:
            left = self.bar.x
            right = self.bar.x + self.bar.width
            clamped = min(max(float(mx), left), right)
            self.set_value((clamped - left) / self.bar.width)