# pengoslide

The rules and moving parts of a Pengo-style arcade game, without any rendering
or input devices attached. A penguin walks a grid of ice blocks. It pushes
blocks, which slide until they hit something, or breaks blocks that cannot
move. Enemies roam the grid, hatch from eggs hidden in blocks, and die when a
sliding block crushes them or pushes them off the board.

The package has no dependencies outside the standard library.

## What is inside

- `pengoslide.grid`: `GridModel` holds the wall layout. `slide_or_break`
  moves a wall as far as it can go, or breaks it when it is blocked, and
  returns a `SlideResult`. `GridLogic` converts between world positions and
  grid cells. `slide_or_break_at` returns whether the wall moved or broke, and
  the cell it slid to. `LevelData`, `LevelTile` and `TileType` describe a
  level.
- `pengoslide.world`: the small scene model. It has `Vec3`, `AABB`, `Entity`
  with components, `Subject` and `GameEvent` for observers, and `GameManager`,
  which resets every registered player and enemy for a new round.
- `pengoslide.actors`: `Player` moves one grid step at a time and pushes or
  breaks walls. `EnemyAI` roams in random directions and breaks walls in its
  way. When it dies it notifies its observers with `GameEvent.ENEMY_DIED` and
  hatches the next egg. `PlayerCollisionListener` kills its player when it
  receives `GameEvent.PLAYER_DIED`.
- `pengoslide.walls`: `Wall` handles sliding and breaking. `EnemyPushSystem`
  carries enemies along in front of a sliding wall. It kills them instead when
  the push would take them off the grid or into another wall.
- `pengoslide.gridview`: `GridView` spawns walls, eggs, players and enemies
  from a `LevelData`, hatches four random eggs when a level loads, and keeps
  the model and the entities in step.
- `pengoslide.levels`: `LevelManager` loads a list of level names one after
  another, through a loader callable that you supply.
- `pengoslide.scoring`: `Score`, `Lives` (four lives by default) and
  `ScoreObserver`, which adds 400 points for each enemy killed.
- `pengoslide.highscores`: `HighscoreManager` keeps a table sorted from the
  highest score down, in a plain text file with one `INI score` line per
  entry. `add_entry` keeps at most 100 entries and writes the file at once.
  `top(n)` returns the best `n` entries. `set_pending_score` and
  `pending_score` pass a finished game's score on to the high-score screen.
- `pengoslide.character`: `Character` runs a small state machine with
  `IdleState`, `RunningState` and `PushingState`, and keeps a per-frame
  `moving` flag.
- `pengoslide.commands`: the input commands `MoveCommand`, `AttackCommand`
  (which has no effect on the world), `SoundCommand`, `SkipLevelCommand` and
  `LambdaCommand`.
- `pengoslide.states`: `GameState` and the screens `MainMenuState`,
  `HighScoreState` and `GameOverState`, together with `StateTransition`.
  Each state lists the commands it wants in a `bindings` dict, keyed by input
  names such as `"left"`, `"return"` or `"pad_a"`. `render()` returns the text
  lines the screen currently shows.
- `pengoslide.singleplayer`: `SinglePlayerState` plays the level list. It moves
  the walls, enemies and the player each frame, counts lives, and gives a time
  bonus for a level cleared within 60 seconds. It asks for the high-score
  screen when the lives or the levels run out.
- `pengoslide.manager`: `GameStateManager` starts at the main menu and
  switches screens when the active one asks for a transition.
- `pengoslide.sound`: the `SoundSystem` interface, `SilentSoundSystem`, which
  records what it is asked to play, and the `SoundPlayer` observer, which
  plays effects on game events.

## Sliding and breaking walls

```python
from pengoslide.grid import GridModel, SlideResult

model = GridModel(5, 1)
model.set_wall(0, 0)

assert model.slide_or_break(0, 0, 1, 0) is SlideResult.MOVED
assert model.is_wall(4, 0)        # the block slid to the far edge

assert model.slide_or_break(4, 0, 1, 0) is SlideResult.BROKEN
assert not model.is_wall(4, 0)    # blocked by the edge, so it broke
```

## Driving the screens

```python
from pengoslide.grid import LevelData, LevelTile, TileType
from pengoslide.highscores import HighscoreManager
from pengoslide.manager import GameStateManager


def load_level(name: str) -> LevelData:
    return LevelData(5, 5, [LevelTile(0, 0, TileType.PLAYER), LevelTile(2, 2, TileType.WALL)])


game = GameStateManager(HighscoreManager("scores.txt"), load_level)
game.start()
print(game.render())          # ['Game Mode: Single Player', 'Press A/Enter to start']

game.current_state.bindings["return"].execute()
game.update(1 / 60)           # switches to the single-player screen
```

You feed input into the game yourself: look up the active state's `bindings`
and call `execute()` on the command, then call `update(dt)` once per frame.

## What it does not do

- It draws nothing, plays no audio and reads no keyboard or gamepad. Output is
  text lines from `render()` and calls on a `SoundSystem`. The only sound
  system included is `SilentSoundSystem`.
- It does not read level files. `LevelManager`, `SinglePlayerState` and
  `GameStateManager` take a loader callable that turns a level name (by
  default `Level1.json` to `Level3.json`) into a `LevelData`.
- Only single-player is playable. Choosing "Co-Op" in the main menu requests a
  transition that `GameStateManager` has no screen for, so the menu stays. The
  manager also has no screen for "Versus", and it never switches to
  `GameOverState`.
- There is no command-line entry point.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.