"""Turrets, the battlefield they defend, their shop buttons and the upgrade panel."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, Optional

from towerdefense.widgets import ImageButton

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class Vec2:
    """An immutable 2-D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vec2:
        """The unit vector in this direction; the zero vector stays zero."""
        length = self.magnitude()
        if length == 0:
            return Vec2()
        return self / length

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y


@dataclass(eq=False)
class Enemy:
    """An enemy as seen by turrets: a position, a hit radius and health."""

    position: Vec2
    hp: float = 100.0
    collision_radius: float = 0.0
    speed_multiplier: float = 1.0
    locked_turrets: list[Turret] = field(default_factory=list)

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def hit(self, damage: float) -> bool:
        """Take damage; return whether the enemy is now dead."""
        self.hp -= damage
        return not self.alive


@dataclass(eq=False)
class Bullet:
    """A projectile fired by a turret."""

    kind: str
    position: Vec2
    direction: Vec2
    rotation: float
    parent: Optional[Turret] = None


@dataclass
class FloatingText:
    """A short text shown at a position until its time runs out."""

    position: Vec2
    text: str
    time_left: float


@dataclass
class Battlefield:
    """The play state turrets act upon."""

    money: int = 0
    enemies: list[Enemy] = field(default_factory=list)
    bullets: list[Bullet] = field(default_factory=list)
    floating_texts: list[FloatingText] = field(default_factory=list)
    sounds: list[str] = field(default_factory=list)

    def earn_money(self, amount: int) -> None:
        self.money += amount

    def add_bullet(self, bullet: Bullet) -> None:
        self.bullets.append(bullet)


class Turret(ABC):
    """A tower that locks onto the first enemy in range, turns to it and fires."""

    PRICE = 0
    MAX_LEVEL = 6
    BARREL_LENGTH = 36
    SPECIAL_BULLET_COUNT = 360

    def __init__(
        self,
        battlefield: Battlefield,
        base_image: str,
        turret_image: str,
        x: float,
        y: float,
        radius: float,
        price: int,
        cool_down: float,
    ) -> None:
        self.battlefield = battlefield
        self.base_image = base_image
        self.turret_image = turret_image
        self.position = Vec2(x, y)
        self.collision_radius = float(radius)
        self.price = price
        self.cool_down = cool_down
        self.reload = 0.0
        self.rotate_radian = 2 * math.pi
        self.rotation = 0.0
        self.up_cost = 0
        self.level = 1
        self.special_effect = False
        self.enabled = True
        self.preview = False
        self.just_placed = False
        self.evo_times = 600
        self.target: Optional[Enemy] = None

    def update(self, delta_time: float) -> None:
        """Advance one frame: special burst, targeting, turning and firing."""
        self._release_special_burst()
        if not self.enabled:
            return
        self._release_lost_target()
        if self.target is None:
            self._lock_first_target()
        if self.target is not None:
            self._turn_towards(self.target, delta_time)
            self.reload -= delta_time
            if self.reload <= self._fire_threshold():
                self.reload = self.cool_down
                self.create_bullet()

    def upgrade(self, new_level: int) -> None:
        """Raise the turret to ``new_level``; levels outside 1..6 are ignored."""
        if not 1 <= new_level <= self.MAX_LEVEL:
            return
        self.level = new_level
        if new_level < self.MAX_LEVEL:
            self.cool_down = max(0.1, 1.0 - 0.1 * (new_level - 1))
        else:
            self.special_effect = True
            self.cool_down = max(0.1, 1.1 - 0.1 * (new_level - 1))
        self.collision_radius += 5 * (new_level - 1)

    @abstractmethod
    def create_bullet(self) -> None:
        """Fire this turret's ordinary shot."""

    def create_special_bullet(self, angle: float) -> None:
        direction = Vec2(math.cos(angle), math.sin(angle))
        self.battlefield.add_bullet(
            Bullet("laser", self.position + direction * self.BARREL_LENGTH, direction, angle, self)
        )

    def set_just_placed(self) -> None:
        self.just_placed = True
        self.special_effect = True

    def level_label(self) -> str:
        """The text shown under the turret."""
        return "MAX" if self.level == self.MAX_LEVEL else f"Lv{self.level}"

    def _fire_threshold(self) -> float:
        return 0.07 * self.level

    def _release_special_burst(self) -> None:
        if not (self.just_placed and self.level == self.MAX_LEVEL and self.evo_times):
            return
        if self.evo_times % 30 == 0:
            step = 2 * math.pi / self.SPECIAL_BULLET_COUNT
            for i in range(self.SPECIAL_BULLET_COUNT):
                self.create_special_bullet(step * i)
        self.special_effect = False
        self.evo_times -= 1
        if self.evo_times == 0:
            self.just_placed = False

    def _in_range(self, enemy: Enemy) -> bool:
        return (enemy.position - self.position).magnitude() <= self.collision_radius

    def _release_lost_target(self) -> None:
        target = self.target
        if target is not None and not self._in_range(target):
            if self in target.locked_turrets:
                target.locked_turrets.remove(self)
            self.target = None

    def _lock_first_target(self) -> None:
        for enemy in self.battlefield.enemies:
            if self._in_range(enemy):
                self.target = enemy
                enemy.locked_turrets.append(self)
                return

    def _facing(self) -> Vec2:
        # The image points upward, hence the quarter-turn offset.
        angle = self.rotation - math.pi / 2
        return Vec2(math.cos(angle), math.sin(angle))

    def _turn_towards(self, enemy: Enemy, delta_time: float) -> None:
        origin = self._facing()
        wanted = (enemy.position - self.position).normalize()
        max_turn = self.rotate_radian * delta_time
        cos_theta = max(-1.0, min(1.0, origin.dot(wanted)))
        radian = math.acos(cos_theta)
        if radian <= max_turn:
            heading = wanted
        else:
            heading = ((radian - max_turn) * origin + max_turn * wanted) / radian
        self.rotation = math.atan2(heading.y, heading.x) + math.pi / 2

    def _barrel(self) -> tuple[Vec2, Vec2, float]:
        """Barrel direction, its left-hand normal and its angle."""
        facing = self._facing()
        angle = math.atan2(facing.y, facing.x)
        forward = facing.normalize()
        normal = Vec2(-forward.y, forward.x)
        return forward, normal, angle

    def _fire(self, kind: str, offset: Vec2 = Vec2()) -> None:
        forward, _, angle = self._barrel()
        muzzle = self.position + forward * self.BARREL_LENGTH + offset
        self.battlefield.add_bullet(Bullet(kind, muzzle, self._facing(), angle, self))


class LaserTurret(Turret):
    """A twin-barrelled turret firing paired shots."""

    PRICE = 20

    def __init__(self, battlefield: Battlefield, x: float, y: float) -> None:
        super().__init__(
            battlefield, "play/tower-base.png", "play/turret-2.png", x, y, 170, self.PRICE, 0.8
        )
        self.up_cost = 40

    def create_bullet(self) -> None:
        _, normal, _ = self._barrel()
        self._fire("bullet5", -normal * 6)
        self._fire("bullet5", normal * 6)
        self.battlefield.sounds.append("gun.wav")


class HomingMissileTurret(Turret):
    """A long-range turret firing homing missiles."""

    PRICE = 100

    def __init__(self, battlefield: Battlefield, x: float, y: float) -> None:
        super().__init__(
            battlefield, "play/tower-base.png", "play/turret-4.png", x, y, 1400, self.PRICE, 0.2
        )

    def create_bullet(self) -> None:
        self._fire("missile")
        self.battlefield.sounds.append("gun.wav")


class CoinGen(Turret):
    """A farm that does not attack but pays out coins at a steady rate."""

    PRICE = 20
    PAYOUT = 5

    def __init__(self, battlefield: Battlefield, x: float, y: float) -> None:
        super().__init__(
            battlefield, "play/tower-base.png", "play/farm.png", x, y, 0, self.PRICE, 5.0
        )

    def update(self, delta_time: float) -> None:
        self.up_cost = 70
        self.reload -= delta_time
        if self.reload <= 0.02 * self.level:
            self.reload = self.cool_down
            self.battlefield.earn_money(self.PAYOUT)
            self.battlefield.floating_texts.append(
                FloatingText(self.position, f"+{self.PAYOUT}", 1.0)
            )

    def create_bullet(self) -> None:
        """A farm fires nothing."""


class TurretButton(ImageButton):
    """A shop button that is only enabled while the player can afford it."""

    AFFORDABLE_TINT: Color = (255, 255, 255, 255)
    UNAFFORDABLE_TINT: Color = (0, 0, 0, 160)

    def __init__(
        self,
        battlefield: Battlefield,
        img: str,
        img_in: str,
        base: str,
        turret: str,
        x: float,
        y: float,
        money: int,
        *,
        bitmap_size: tuple[int, int],
        mouse: Optional[tuple[float, float]] = None,
    ) -> None:
        super().__init__(img, img_in, x, y, bitmap_size=bitmap_size, mouse=mouse)
        self.battlefield = battlefield
        self.base = base
        self.turret = turret
        self.money = money
        self.tint: Color = self.AFFORDABLE_TINT

    def update(self, delta_time: float) -> None:
        self.enabled = self.battlefield.money >= self.money
        self.tint = self.AFFORDABLE_TINT if self.enabled else self.UNAFFORDABLE_TINT


class UpgradeSystem:
    """An overlay of level buttons that sets the level of a chosen turret."""

    LEVELS = 5
    LEFT = 100
    TOP = 300
    SPACING = 120
    BUTTON_SIZE = 100

    def __init__(self) -> None:
        self.active = False
        self.target_turret: Optional[Turret] = None

    def activate(self, turret: Turret) -> None:
        self.active = True
        self.target_turret = turret

    def deactivate(self) -> None:
        self.active = False
        self.target_turret = None

    def on_mouse_down(self, button: int, mx: float, my: float) -> None:
        """On a left click over a level button, set that level and close."""
        if not self.active or self.target_turret is None or button != 1:
            return
        for level, (left, top, right, bottom) in self._buttons():
            if left <= mx <= right and top <= my <= bottom:
                self.target_turret.upgrade(level)
                self.deactivate()
                return

    def _buttons(self) -> Iterator[tuple[int, tuple[float, float, float, float]]]:
        for index in range(self.LEVELS):
            left = self.LEFT + index * self.SPACING
            yield index + 1, (left, self.TOP, left + self.BUTTON_SIZE, self.TOP + self.BUTTON_SIZE)