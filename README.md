# towerdefense

Game logic for a tower-defense game. The package holds state and rules only. You drive it by calling `update(delta_time)` once per frame, and your own front end does the drawing.

## Modules

### `towerdefense.textbox`

- `TextBox(x, y, width, height, font_name="romulus.ttf", font_size=24, placeholder="")` is a single-line input of lower-case letters. The limit is 16 characters by default and can be changed through `max_length`.
  - Input handling:
    - `handle_mouse_click` focuses or unfocuses the box.
    - `handle_char_input` inserts the letter for a letter key code.
    - `handle_key_press` handles Left, Right, Home, End, Backspace, Delete and Enter.
  - Text and focus:
    - `set_text` sets the content and truncates it to `max_length`.
    - `set_focus` and `lose_focus` change focus.
  - Display:
    - `password_mode` masks the shown text with `*`.
    - `update` makes the cursor blink every 0.5 s.
  - Callbacks are plain attributes: `on_text_changed`, `on_enter_pressed`, `on_focus_gained` and `on_focus_lost`.
- `Key` holds the key codes the box understands.

### `towerdefense.widgets`

- `Image` is an anchored image. It is sized from `bitmap_size` when only one dimension, or neither, is given. `top_left()` returns its drawing origin.
- `ImageButton` tracks hover through `on_mouse_move` and shows `img_in` while it is hovered and enabled. A left click runs the callback given to `set_on_click`. You can pass `hit_test` to decide which bitmap pixels count as part of the button.
- `Label` holds text, font, colour and anchor. `draw_origin(text_width, text_height)` returns where the text starts.
- `Slider` is a knob on a bar. Dragging with the left button sets `value` between 0 and 1 and calls the callback given to `set_on_value_changed`. `set_value` moves the knob directly.

### `towerdefense.turret`

- `Vec2` is an immutable 2-D vector.
- `Enemy` carries the enemy's position, `hp`, collision radius and speed multiplier. `hit(damage)` returns whether the enemy died.
- `Bullet` is a record of one shot: its kind, position, direction, rotation and parent turret.
- `FloatingText` is a short-lived text shown on the field.
- `Battlefield` is the shared state. It holds `money`, `enemies`, `bullets`, `floating_texts`, and `sounds`, the names of the sounds the game should play.
- `Turret` is the abstract base class. On each update it does the following:
  - It locks onto the first enemy in range, in the order of `battlefield.enemies`.
  - It turns toward that enemy at a limited rate.
  - It fires when its reload has counted down.
  - `upgrade(level)` accepts levels 1 to 6 and ignores any other level.
  - At level 6, after `set_just_placed()`, it releases a burst of 360 laser shots every 30 updates, for 600 updates in all.
  - `level_label()` returns `"Lv<n>"` below level 6 and `"MAX"` at level 6.
- `LaserTurret` fires paired shots.
- `HomingMissileTurret` fires missiles and has a long range.
- `CoinGen` attacks nothing. It pays 5 coins on a fixed interval and adds a `"+5"` floating text each time.
- `TurretButton` is a shop button. It is enabled and untinted while the player can afford it, and disabled and darkened otherwise.
- `UpgradeSystem` is an overlay with five level buttons. A left click on one of them upgrades the chosen turret and closes the overlay.

### `towerdefense.turret_kinds`

- `AntiAirTurret` fires a fan of three shots, and five at level 6.
- `FireTurret` fires at up to 5 enemies in range at once, and up to 10 at level 6.
- `FreezeTurret` fires snowballs. At level 6 it also halves the speed of every enemy in range.
- `MachineGunTurret` fires light rounds up to level 3 and heavier rounds above it.

### `towerdefense.effects`

- `DirtyEffect` is a ground stain that fades out over its time span.
- `ExplosionEffect` is a five-frame explosion that lasts 0.5 s.
- `Plane` works in stages:
  1. It flies across the screen.
  2. It shows a growing flash.
  3. It expands a shockwave that kills every enemy it reaches.

When an effect is given a `group` list, it removes itself from that list once it is finished.

## Example

```python
from towerdefense.textbox import Key, TextBox

box = TextBox(0, 0, 200, 40)
box.handle_mouse_click(10, 10)       # focuses the box
box.handle_char_input(Key.A)         # text is now "a"
box.handle_key_press(Key.BACKSPACE)  # text is empty again
box.set_text("player")
print(box.text)                      # player
```

```python
from towerdefense.turret import Battlefield, Enemy, Vec2
from towerdefense.turret_kinds import MachineGunTurret

field = Battlefield(money=100, enemies=[Enemy(Vec2(150, 100))])
gun = MachineGunTurret(field, 100, 100)
gun.update(1 / 60)
print(gun.target is field.enemies[0], len(field.bullets))
```

## What it does not do

This package contains no rendering, windowing, audio playback, asset loading, scenes, enemy movement, map or wave logic, and no command to start a game. Sounds are only recorded as names in `Battlefield.sounds`, and bullets are only records in `Battlefield.bullets`. Moving bullets and applying their hits is left to the caller.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```