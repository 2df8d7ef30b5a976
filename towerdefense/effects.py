"""Short-lived visual effects: ground stains, explosions and the shockwave plane."""

from __future__ import annotations

import math
import random
from typing import Optional

from towerdefense.turret import Battlefield, Vec2

Color = tuple[int, int, int, int]


class _Effect:
    """A moving picture that removes itself from its group when done."""

    def __init__(
        self,
        image: str,
        x: float,
        y: float,
        group: Optional[list] = None,
    ) -> None:
        self.image = image
        self.position = Vec2(x, y)
        self.velocity = Vec2()
        self.rotation = 0.0
        self.tint: Color = (255, 255, 255, 255)
        self.group = group
        self.finished = False

    def _move(self, delta_time: float) -> None:
        self.position = self.position + self.velocity * delta_time

    def _finish(self) -> None:
        self.finished = True
        if self.group is not None and self in self.group:
            self.group.remove(self)


class DirtyEffect(_Effect):
    """A stain on the ground that fades out over ``time_span`` seconds."""

    def __init__(
        self,
        img: str,
        time_span: float,
        x: float,
        y: float,
        *,
        group: Optional[list] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(img, x, y, group)
        if time_span <= 0:
            raise ValueError("time span must be positive")
        self.time_span = time_span
        self.alpha = 1.0
        self.rotation = (rng or random.Random()).uniform(-math.pi, math.pi)

    def update(self, delta_time: float) -> None:
        """Fade a step; once fully transparent, leave the group."""
        if self.finished:
            return
        self.alpha -= delta_time / self.time_span
        if self.alpha <= 0:
            self._finish()
            return
        r, g, b, _ = self.tint
        self.tint = (r, g, b, int(self.alpha * 255))
        self._move(delta_time)


class ExplosionEffect(_Effect):
    """A five-frame explosion that lasts half a second."""

    TIME_SPAN = 0.5
    FRAMES = tuple(f"play/explosion-{i}.png" for i in range(1, 6))

    def __init__(self, x: float, y: float, *, group: Optional[list] = None) -> None:
        super().__init__(self.FRAMES[0], x, y, group)
        self.time_ticks = 0.0

    def update(self, delta_time: float) -> None:
        """Show the frame for the elapsed time; leave the group when over."""
        if self.finished:
            return
        self.time_ticks += delta_time
        if self.time_ticks >= self.TIME_SPAN:
            self._finish()
            return
        phase = math.floor(self.time_ticks / self.TIME_SPAN * len(self.FRAMES))
        self.image = self.FRAMES[phase]
        self._move(delta_time)


class Plane(_Effect):
    """A plane that crosses the screen, then drops a flash and a killing shockwave.

    Stages: 0 flying across, 1 growing light, 2 shockwave hitting enemies,
    3 done. ``plane_size``, ``light_size`` and ``shockwave_size`` are the
    pixel sizes of the plane, light and shockwave images.
    """

    TIME_SPAN_LIGHT = 1.0
    TIME_SPAN_SHOCKWAVE = 1.0
    SHOCKWAVE_RADIUS = 180.0
    MIN_SCALE = 1.0 / 8
    MAX_SCALE = 8.0
    SPEED = 800.0
    START_X = -100.0
    LIGHT_FRAMES = tuple(f"play/light-{i}.png" for i in range(1, 11))
    SHOCKWAVE_IMAGE = "play/shockwave.png"

    def __init__(
        self,
        battlefield: Battlefield,
        *,
        plane_size: tuple[float, float],
        light_size: tuple[float, float],
        shockwave_size: tuple[float, float],
        group: Optional[list] = None,
        client_size: tuple[float, float] = (1600, 832),
        screen_height: float = 832,
    ) -> None:
        super().__init__("play/plane.png", self.START_X, screen_height / 2, group)
        self.battlefield = battlefield
        self.client_size = Vec2(*client_size)
        self._plane_size = Vec2(*plane_size)
        self._light_size = Vec2(*light_size)
        self._shockwave_size = Vec2(*shockwave_size)
        self.size = self._plane_size
        self.velocity = Vec2(self.SPEED, 0)
        self.stage = 0
        self.time_ticks = 0.0
        self.scale = 1.0
        self.collision_radius = 0.0

    def update(self, delta_time: float) -> None:
        """Advance the plane's animation by one frame."""
        if self.finished:
            return
        if self.stage == 0:
            self._fly()
        elif self.stage == 1:
            self._flash(delta_time)
        elif self.stage == 2:
            self._shockwave(delta_time)
        else:
            self._finish()
            return
        self._move(delta_time)

    def _fly(self) -> None:
        half = self.size / 2
        if not _rects_overlap(
            self.position - half,
            self.position + half,
            Vec2(self.START_X, 0),
            self.client_size,
        ):
            self.position = self.client_size / 2
            self.velocity = Vec2()
            self.image = self.LIGHT_FRAMES[0]
            self.size = self._light_size * self.MIN_SCALE
            self.scale = self.MIN_SCALE
            self.stage = 1

    def _flash(self, delta_time: float) -> None:
        self.time_ticks += delta_time
        if self.time_ticks >= self.TIME_SPAN_LIGHT:
            self.image = self.SHOCKWAVE_IMAGE
            self.stage = 2
            self.battlefield.sounds.append("shockwave.ogg")
            return
        self._grow(self._light_size)
        phase = math.floor(
            self.time_ticks / self.TIME_SPAN_LIGHT * len(self.LIGHT_FRAMES)
        )
        self.image = self.LIGHT_FRAMES[phase]

    def _shockwave(self, delta_time: float) -> None:
        self.time_ticks += delta_time
        if self.time_ticks >= self.TIME_SPAN_LIGHT + self.TIME_SPAN_SHOCKWAVE:
            self.time_ticks = 0.0
            self.stage = 3
            return
        self._grow(self._shockwave_size)
        for enemy in list(self.battlefield.enemies):
            distance = (enemy.position - self.position).magnitude()
            if distance < self.collision_radius + enemy.collision_radius:
                enemy.hit(math.inf)

    def _grow(self, bitmap_size: Vec2) -> None:
        total = self.TIME_SPAN_LIGHT + self.TIME_SPAN_SHOCKWAVE
        t = self.time_ticks
        exponent = (
            (total - t) * math.log2(self.MIN_SCALE) + t * math.log2(self.MAX_SCALE)
        ) / total
        self.scale = 2 ** exponent
        self.size = bitmap_size * self.scale
        self.collision_radius = self.SHOCKWAVE_RADIUS * self.scale


def _rects_overlap(min1: Vec2, max1: Vec2, min2: Vec2, max2: Vec2) -> bool:
    return (
        min1.x < max2.x
        and min2.x < max1.x
        and min1.y < max2.y
        and min2.y < max1.y
    )