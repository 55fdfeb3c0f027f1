"""The single-player game screen: levels, lives, score and input."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from pengoslide.actors import EnemyAI, Player
from pengoslide.character import Character
from pengoslide.commands import LambdaCommand, MoveCommand, SoundCommand
from pengoslide.grid import LevelData
from pengoslide.gridview import GridView
from pengoslide.highscores import HighscoreManager, set_pending_score
from pengoslide.levels import LevelManager
from pengoslide.scoring import STARTING_LIVES, Lives, Score, ScoreObserver
from pengoslide.sound import MUSIC_TRACK, MUSIC_VOLUME, SilentSoundSystem, SoundPlayer, SoundSystem
from pengoslide.states import GameState, StateTransition
from pengoslide.walls import Wall
from pengoslide.world import Entity, GameManager, Vec3

log = logging.getLogger(__name__)

DEFAULT_LEVEL_FILES = ("Level1.json", "Level2.json", "Level3.json")
MOVE_SPEED = 100.0
LEVEL_TIME_LIMIT = 60.0
TIME_BONUS_PER_SECOND = 10.0

_MOVE_BINDINGS = (
    ("up", "dpad_up", Vec3(0.0, -1.0, 0.0)),
    ("down", "dpad_down", Vec3(0.0, 1.0, 0.0)),
    ("left", "dpad_left", Vec3(-1.0, 0.0, 0.0)),
    ("right", "dpad_right", Vec3(1.0, 0.0, 0.0)),
)


class SinglePlayerState(GameState):
    """One player working through the level list until lives or levels run out."""

    def __init__(
        self,
        scene: Optional[list[Entity]],
        view: GridView,
        highscores: HighscoreManager,
        level_loader: Callable[[str], LevelData],
        sound_system: Optional[SoundSystem] = None,
        level_files: Iterable[str] = DEFAULT_LEVEL_FILES,
    ) -> None:
        super().__init__(scene)
        self.view: Optional[GridView] = view
        self.score: Optional[Score] = view.score
        self.highscores = highscores
        self.sound_system = sound_system if sound_system is not None else SilentSoundSystem()
        self.level_manager = LevelManager(level_files, level_loader)
        self.game_manager = GameManager()
        self.player: Optional[Entity] = None
        self.enemies: list[Entity] = []
        self.lives_component: Optional[Lives] = None
        self.lives = STARTING_LIVES
        self.score_observer: Optional[ScoreObserver] = None
        self.level_timer = 0.0
        self.timer_running = False
        self.reset_timer = 0.0
        self.muted = False
        self._score_text: Optional[Entity] = None
        self._lives_text: Optional[Entity] = None

    def on_enter(self) -> None:
        self.highscores.load()
        self.sound_system.play_music(MUSIC_TRACK, MUSIC_VOLUME, True)
        self._init_hud()
        self._init_grid_and_level()
        self._init_input()
        self.level_timer = 0.0
        self.timer_running = True

    def on_exit(self) -> None:
        self.sound_system.stop_music()
        if self._lives_text is not None:
            self._lives_text.mark_for_destroy()
        self.bindings.clear()
        self.player = None
        self.enemies.clear()
        self.lives_component = None
        self.score = None
        self.view = None
        self.level_manager.reset()

    def update(self, dt: float) -> None:
        self._advance_world(dt)

        player = self.player.get_component(Player) if self.player is not None else None
        if player is not None and not player.alive:
            self._on_player_dead()
            self.reset_timer = 0.0
            self.game_manager.reset_round()
            return

        self._set_label(self._score_text, f"Score: {self.score.score if self.score is not None else 0}")

        if self.timer_running:
            self.level_timer += dt

        if self.view is not None and not self.view.has_enemies_remaining():
            self._on_level_complete()

    def toggle_mute(self) -> None:
        self.muted = not self.muted
        self.sound_system.set_master_volume(0.0 if self.muted else 1.0)

    def skip_to_next_level(self) -> None:
        """Load the next level, or finish the game when none is left."""
        self._advance_level()

    def _init_hud(self) -> None:
        self.scene.append(Entity(Vec3(0.0, 47.0, 0.0), tag="background"))

    def _init_grid_and_level(self) -> None:
        if not self.level_manager.load_next_level(self.view):
            log.error("[SinglePlayerState] Failed to load first level!")
            return
        self._take_spawned()
        self._init_player_components()
        self._register_enemies()

    def _take_spawned(self) -> None:
        players = self.view.spawned_players()
        self.player = players[0] if players else None
        self.enemies = self.view.spawned_enemies()

    def _init_player_components(self) -> None:
        sound_observer = SoundPlayer(self.sound_system)

        for text in (self._score_text, self._lives_text):
            if text is not None:
                text.mark_for_destroy()
        self._score_text = None
        self._lives_text = None
        if self.player is None:
            return

        lives = self.player.get_component(Lives)
        if lives is None:
            lives = self.player.add_component(Lives(self.lives))
        self.lives_component = lives
        lives.add_game_over_observer(self._on_player_dead)
        lives.add_observer(self._show_lives)

        if self.score_observer is None and self.score is not None:
            self.score_observer = ScoreObserver(self.score)

        self._score_text = self._add_label("Score: 0", Vec3(10.0, 10.0, 0.0))
        self._lives_text = self._add_label(f"Lives: {lives.lives}", Vec3(200.0, 10.0, 0.0))

        player = self.player.get_component(Player)
        if player is not None:
            self.game_manager.register_player(player)

        for enemy in self.enemies:
            ai = enemy.get_component(EnemyAI)
            if ai is not None:
                if self.score_observer is not None:
                    ai.attach_observer(self.score_observer)
                ai.attach_observer(sound_observer)

    def _register_enemies(self) -> None:
        for enemy in self.enemies:
            ai = enemy.get_component(EnemyAI)
            self.game_manager.register_enemy(ai)
            if ai is not None and self.score_observer is not None:
                ai.attach_observer(self.score_observer)

    def _show_lives(self, lives: int) -> None:
        self._set_label(self._lives_text, f"Lives: {lives}")

    def _init_input(self) -> None:
        for key, button, direction in _MOVE_BINDINGS:
            self.bindings[key] = MoveCommand(self.player, MOVE_SPEED, direction)
            self.bindings[button] = MoveCommand(self.player, MOVE_SPEED, direction)
        self.bindings["f2"] = SoundCommand(self.player, 0, 0.0, self.sound_system)
        self.bindings["f1"] = LambdaCommand(self.skip_to_next_level)

    def _advance_world(self, dt: float) -> None:
        view = self.view
        if view is None:
            return
        for wall in view.spawned_walls():
            component = wall.get_component(Wall)
            if component is not None:
                component.fixed_update(dt)
        for enemy in view.spawned_enemies():
            ai = enemy.get_component(EnemyAI)
            if ai is not None:
                ai.fixed_update(dt)
        for entity in view.spawned_players():
            player = entity.get_component(Player)
            if player is not None:
                player.update(dt)
        for entity in (*view.spawned_players(), *view.spawned_enemies()):
            character = entity.get_component(Character)
            if character is not None:
                character.update(dt)

    def _on_player_dead(self) -> None:
        if self.lives_component is None:
            return
        self.lives_component.lose_life()
        self.lives = self.lives_component.lives
        if self.lives <= 0:
            if self.score is not None:
                set_pending_score(self.score.score)
            self.requested_transition = StateTransition.TO_HIGH_SCORE
        else:
            self.timer_running = False

    def _on_level_complete(self) -> None:
        if self.level_timer < LEVEL_TIME_LIMIT and self.score is not None:
            self.score.add_points(int((LEVEL_TIME_LIMIT - self.level_timer) * TIME_BONUS_PER_SECOND))
        self._advance_level()

    def _advance_level(self) -> None:
        if self.level_manager.load_next_level(self.view):
            self.game_manager.unregister_players()
            self.game_manager.unregister_enemies()
            self.level_timer = 0.0
            self.timer_running = True
            self._take_spawned()
            self._init_player_components()
            self._register_enemies()
            self.bindings.clear()
            self._init_input()
            return

        for entity in self.scene:
            entity.mark_for_destroy()
        self.scene.clear()
        self.timer_running = False
        if self.score is not None:
            set_pending_score(self.score.score)
        self.requested_transition = StateTransition.TO_HIGH_SCORE