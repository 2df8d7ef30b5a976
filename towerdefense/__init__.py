"""Tower-defense game logic: a text box, UI widgets, turrets and timed effects."""

__version__ = "0.1.0"
__all__ = ["textbox", "widgets", "turret", "turret_kinds", "effects"]