import math

import pytest

from towerdefense.turret import Battlefield, Enemy, Turret, Vec2
from towerdefense.turret_kinds import (
    AntiAirTurret,
    FireTurret,
    FreezeTurret,
    MachineGunTurret,
)


def field_with(*offsets, origin=(100.0, 100.0)):
    ox, oy = origin
    return Battlefield(enemies=[Enemy(Vec2(ox + dx, oy + dy)) for dx, dy in offsets])


def approx_vec(vec):
    return (pytest.approx(vec.x, abs=1e-9), pytest.approx(vec.y, abs=1e-9))


# --- AntiAirTurret ---------------------------------------------------------


def test_anti_air_fires_symmetric_fan():
    bf = Battlefield()
    turret = AntiAirTurret(bf, 100, 100)
    turret.create_bullet()
    assert len(bf.bullets) == 3
    assert {b.kind for b in bf.bullets} == {"bullet6"}
    left, middle, right = (b.position for b in bf.bullets)
    centre = (left + right) / 2
    assert (centre.x, centre.y) == approx_vec(middle)
    assert (middle - turret.position).magnitude() == pytest.approx(Turret.BARREL_LENGTH)


def test_anti_air_max_level_fires_extra_shots():
    bf = Battlefield()
    turret = AntiAirTurret(bf, 100, 100)
    turret.upgrade(6)
    turret.create_bullet()
    assert len(bf.bullets) == 5


def test_anti_air_locks_and_fires_at_enemy_in_range():
    bf = field_with((0, 400))
    turret = AntiAirTurret(bf, 100, 100)
    turret.update(0.01)
    enemy = bf.enemies[0]
    assert turret.target is enemy
    assert turret in enemy.locked_turrets
    assert bf.bullets
    assert turret.reload == turret.cool_down


def test_anti_air_releases_target_that_leaves_range():
    bf = field_with((0, 400))
    turret = AntiAirTurret(bf, 100, 100)
    turret.update(0.01)
    enemy = bf.enemies[0]
    enemy.position = Vec2(100, 100 + turret.collision_radius + 50)
    turret.update(0.01)
    assert turret.target is None
    assert turret not in enemy.locked_turrets


def test_anti_air_has_no_placement_burst():
    bf = Battlefield()
    turret = AntiAirTurret(bf, 100, 100)
    turret.set_just_placed()
    turret.upgrade(6)
    turret.update(0.01)
    assert bf.bullets == []


def test_disabled_anti_air_does_nothing():
    bf = field_with((0, 50))
    turret = AntiAirTurret(bf, 100, 100)
    turret.enabled = False
    turret.update(0.01)
    assert turret.target is None
    assert bf.bullets == []


# --- FireTurret ------------------------------------------------------------


def test_fire_turret_caps_targets():
    bf = field_with(*[(10 * i, 0) for i in range(1, 8)])
    turret = FireTurret(bf, 100, 100)
    turret.update(0.01)
    assert turret.targets == bf.enemies[: FireTurret.MAX_TARGETS]
    assert len(bf.bullets) == FireTurret.MAX_TARGETS
    assert {b.kind for b in bf.bullets} == {"bullet9"}


def test_fire_turret_max_level_hits_more_targets_with_stronger_shots():
    bf = field_with(*[(10 * i, 0) for i in range(1, 13)])
    turret = FireTurret(bf, 100, 100)
    turret.upgrade(6)
    turret.update(0.01)
    assert len(bf.bullets) == FireTurret.MAX_TARGETS_AT_MAX_LEVEL
    assert {b.kind for b in bf.bullets} == {"bullet8"}


def test_fire_turret_fires_every_frame():
    bf = field_with((50, 0), (0, 50))
    turret = FireTurret(bf, 100, 100)
    turret.update(0.01)
    first = len(bf.bullets)
    turret.update(0.01)
    assert first == len(bf.enemies)
    assert len(bf.bullets) == 2 * first


def test_fire_turret_aims_each_shot_at_its_target():
    bf = field_with((100, 0))
    turret = FireTurret(bf, 100, 100)
    turret.update(0.01)
    (bullet,) = bf.bullets
    assert (bullet.direction.x, bullet.direction.y) == approx_vec(Vec2(1, 0))


def test_fire_turret_range_grows_with_level():
    bf = field_with((305, 0))
    turret = FireTurret(bf, 100, 100)
    turret.update(0.01)
    assert bf.bullets == []
    turret.upgrade(3)
    turret.update(0.01)
    assert len(bf.bullets) == len(bf.enemies)


@pytest.mark.parametrize("level", [0, 7, -1])
def test_fire_turret_ignores_invalid_upgrade(level):
    turret = FireTurret(Battlefield(), 0, 0)
    turret.upgrade(level)
    assert turret.level == 1
    assert turret.special_effect is False


def test_fire_turret_top_upgrade_keeps_cool_down():
    turret = FireTurret(Battlefield(), 0, 0)
    before = turret.cool_down
    turret.upgrade(6)
    assert turret.level == turret.MAX_LEVEL
    assert turret.special_effect is True
    assert turret.cool_down == before


def test_fire_turret_without_enemies_keeps_reload():
    bf = Battlefield()
    turret = FireTurret(bf, 0, 0)
    turret.update(0.5)
    assert turret.targets == []
    assert turret.reload == 0.0


# --- FreezeTurret ----------------------------------------------------------


def test_freeze_max_level_slows_enemies_in_range():
    bf = field_with((50, 0))
    turret = FreezeTurret(bf, 100, 100)
    turret.upgrade(6)
    turret.update(0.01)
    assert bf.enemies[0].speed_multiplier == FreezeTurret.SLOW_FACTOR


def test_freeze_restores_speed_at_edge_only():
    bf = Battlefield()
    turret = FreezeTurret(bf, 100, 100)
    turret.upgrade(6)
    turret.update(0.01)
    radius = turret.collision_radius
    normal_speed = Enemy(Vec2()).speed_multiplier
    edge = Enemy(Vec2(100 + radius + 1, 100), speed_multiplier=0.3)
    far = Enemy(Vec2(100 + radius + 10, 100), speed_multiplier=0.3)
    bf.enemies.extend([edge, far])
    turret.update(0.01)
    assert edge.speed_multiplier == normal_speed
    assert far.speed_multiplier == 0.3


def test_freeze_below_max_level_does_not_slow():
    bf = field_with((20, 0))
    turret = FreezeTurret(bf, 100, 100)
    turret.upgrade(5)
    turret.update(0.01)
    assert bf.enemies[0].speed_multiplier == Enemy(Vec2()).speed_multiplier


def test_freeze_fires_snowball_with_sound():
    bf = Battlefield()
    turret = FreezeTurret(bf, 0, 0)
    turret.create_bullet()
    assert [b.kind for b in bf.bullets] == ["snow"]
    assert bf.sounds == ["gun.wav"]


def test_freeze_range_grows_with_level():
    bf = Battlefield()
    turret = FreezeTurret(bf, 0, 0)
    turret.update(0.01)
    low = turret.collision_radius
    turret.upgrade(2)
    turret.update(0.01)
    assert turret.collision_radius > low


# --- MachineGunTurret ------------------------------------------------------


def test_machine_gun_round_kind_depends_on_level():
    bf = Battlefield()
    turret = MachineGunTurret(bf, 0, 0)
    turret.create_bullet()
    turret.upgrade(4)
    turret.create_bullet()
    assert [b.kind for b in bf.bullets] == ["bullet7", "bullet3"]
    assert bf.sounds == ["gun.wav", "gun.wav"]


def test_machine_gun_placement_burst_at_max_level():
    bf = Battlefield()
    turret = MachineGunTurret(bf, 0, 0)
    turret.set_just_placed()
    turret.upgrade(6)
    before = turret.evo_times
    turret.update(0.01)
    assert len(bf.bullets) == Turret.SPECIAL_BULLET_COUNT
    assert {b.kind for b in bf.bullets} == {"laser"}
    assert turret.evo_times == before - 1
    assert turret.special_effect is False
    turret.update(0.01)
    assert len(bf.bullets) == Turret.SPECIAL_BULLET_COUNT


def test_machine_gun_fires_at_enemy_above():
    bf = field_with((0, -100))
    turret = MachineGunTurret(bf, 100, 100)
    turret.update(0.01)
    (bullet,) = bf.bullets
    assert bullet.kind == "bullet7"
    assert (bullet.direction.x, bullet.direction.y) == approx_vec(Vec2(0, -1))
    assert turret.reload == turret.cool_down
    assert math.isclose(turret.rotation, 0.0, abs_tol=1e-9)


def test_machine_gun_range_grows_with_level():
    bf = Battlefield()
    turret = MachineGunTurret(bf, 0, 0)
    turret.update(0.01)
    low = turret.collision_radius
    turret.upgrade(3)
    turret.update(0.01)
    assert turret.collision_radius > low