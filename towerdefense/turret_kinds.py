"""Specialised turrets: anti-air spread, multi-target fire, freezing and machine gun."""

from __future__ import annotations

import math
from itertools import islice

from towerdefense.turret import Battlefield, Enemy, Turret


class AntiAirTurret(Turret):
    """A long-range turret firing a fan of three shots, five at the top level."""

    PRICE = 100

    def __init__(self, battlefield: Battlefield, x: float, y: float) -> None:
        super().__init__(
            battlefield, "play/tower-base.png", "play/turret-5.png", x, y, 1000, self.PRICE, 0.8
        )

    def create_bullet(self) -> None:
        _, normal, _ = self._barrel()
        offsets = [-6.0, 0.0, 6.0]
        if self.level == self.MAX_LEVEL:
            offsets += [-3.0, 3.0]
        for offset in offsets:
            self._fire("bullet6", normal * offset)

    def update(self, delta_time: float) -> None:
        self.up_cost = 40
        super().update(delta_time)

    def _release_special_burst(self) -> None:
        """This turret has no placement burst."""

    def _fire_threshold(self) -> float:
        return 0.3 + 0.04 * self.level


class FireTurret(Turret):
    """A flamethrower that fires at several enemies in range at once."""

    PRICE = 50
    MAX_TARGETS = 5
    MAX_TARGETS_AT_MAX_LEVEL = 10
    FIRE_THRESHOLD = 0.4

    def __init__(self, battlefield: Battlefield, x: float, y: float) -> None:
        super().__init__(
            battlefield, "play/tower-base.png", "play/fire_turret.png", x, y, 300, self.PRICE, 0.1
        )
        self.targets: list[Enemy] = []

    def create_bullet(self) -> None:
        self._fire("bullet9")

    def create_bullet_at(self, target: Enemy) -> None:
        """Fire one shot along the current heading, which faces ``target``."""
        self._fire("bullet8" if self.level == self.MAX_LEVEL else "bullet9")

    def update(self, delta_time: float) -> None:
        if not self.enabled:
            return
        self.up_cost = 50
        self.collision_radius = 300 + 5 * (self.level - 1)
        self._release_lost_target()

        limit = (
            self.MAX_TARGETS_AT_MAX_LEVEL if self.level == self.MAX_LEVEL else self.MAX_TARGETS
        )
        in_range = (enemy for enemy in self.battlefield.enemies if self._in_range(enemy))
        self.targets = list(islice(in_range, limit))
        if not self.targets:
            return

        self.reload -= delta_time
        if self.reload <= self.FIRE_THRESHOLD:
            self.reload = self.cool_down
            for target in self.targets:
                heading = (target.position - self.position).normalize()
                self.rotation = math.atan2(heading.y, heading.x) + math.pi / 2
                self.create_bullet_at(target)

    def upgrade(self, new_level: int) -> None:
        """Set the level; range grows below the top level, which turns on the special effect."""
        if not 1 <= new_level <= self.MAX_LEVEL:
            return
        self.level = new_level
        if new_level < self.MAX_LEVEL:
            self.collision_radius += 5 * (new_level - 1)
        else:
            self.special_effect = True


class FreezeTurret(Turret):
    """Fires snowballs; at the top level it also slows every enemy in range."""

    PRICE = 50
    SLOW_FACTOR = 0.5
    RESTORE_MARGIN = 2

    def __init__(self, battlefield: Battlefield, x: float, y: float) -> None:
        super().__init__(
            battlefield, "play/tower-base.png", "play/ice_turret.png", x, y, 200, self.PRICE, 1.0
        )

    def create_bullet(self) -> None:
        self._fire("snow")
        self.battlefield.sounds.append("gun.wav")

    def update(self, delta_time: float) -> None:
        self.up_cost = 40
        self.collision_radius = 150 + 10 * (self.level - 1)
        if self.enabled and self.level == self.MAX_LEVEL:
            self._chill_enemies()
        super().update(delta_time)

    def _chill_enemies(self) -> None:
        radius = self.collision_radius
        for enemy in self.battlefield.enemies:
            distance = (enemy.position - self.position).magnitude()
            if distance <= radius:
                enemy.speed_multiplier = self.SLOW_FACTOR
            elif distance <= radius + self.RESTORE_MARGIN and enemy.speed_multiplier < 1.0:
                # Enemies just leaving the aura get their speed back.
                enemy.speed_multiplier = 1.0

    def _release_special_burst(self) -> None:
        """This turret has no placement burst."""

    def _fire_threshold(self) -> float:
        return 0.01 * self.level


class MachineGunTurret(Turret):
    """A rapid-fire turret whose rounds get heavier above level 3."""

    PRICE = 50

    def __init__(self, battlefield: Battlefield, x: float, y: float) -> None:
        super().__init__(
            battlefield, "play/tower-base.png", "play/turret-1.png", x, y, 250, self.PRICE, 0.7
        )
        self.up_cost = 20

    def create_bullet(self) -> None:
        self._fire("bullet7" if self.level <= 3 else "bullet3")
        self.battlefield.sounds.append("gun.wav")

    def update(self, delta_time: float) -> None:
        self.collision_radius = 200 + 10 * (self.level - 1)
        super().update(delta_time)

    def _fire_threshold(self) -> float:
        return 0.05 * self.level