"""Menu, high-score and game-over screens of the game's state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from pengoslide.commands import Command, LambdaCommand
from pengoslide.highscores import HighscoreEntry, HighscoreManager
from pengoslide.world import Entity, Vec3

GAME_MODES = ("Single Player", "Co-Op", "Versus", "High Score")
INITIALS_LENGTH = 3
TOP_SCORES_SHOWN = 3


class StateTransition(Enum):
    NONE = auto()
    TO_MAIN_MENU = auto()
    TO_SINGLE_PLAYER = auto()
    TO_CO_OP = auto()
    TO_HIGH_SCORE = auto()


@dataclass
class _Label:
    text: str


class GameState:
    """A screen of the game: entered, updated every frame, then left.

    ``bindings`` maps input names (keys and gamepad buttons) to the commands
    the state wants run while it is active.
    """

    def __init__(self, scene: Optional[list[Entity]] = None) -> None:
        self.scene: list[Entity] = scene if scene is not None else []
        self.bindings: dict[str, Command] = {}
        self.requested_transition = StateTransition.NONE

    @property
    def displayed_lines(self) -> list[str]:
        """Texts of the labels currently shown in the scene."""
        lines = []
        for entity in self.scene:
            if entity.marked_for_destroy:
                continue
            label = entity.get_component(_Label)
            if label is not None:
                lines.append(label.text)
        return lines

    def on_enter(self) -> None:
        pass

    def on_exit(self) -> None:
        pass

    def update(self, dt: float) -> None:
        pass

    def render(self) -> list[str]:
        """The lines a frame of this state shows."""
        return self.displayed_lines

    def clear_transition_request(self) -> None:
        self.requested_transition = StateTransition.NONE

    def _add_label(self, text: str, position: Vec3) -> Entity:
        entity = Entity(position, tag="text")
        entity.add_component(_Label(text))
        self.scene.append(entity)
        return entity

    @staticmethod
    def _set_label(entity: Optional[Entity], text: str) -> None:
        if entity is None:
            return
        label = entity.get_component(_Label)
        if label is not None:
            label.text = text

    def _bind(self, names: tuple[str, ...], action) -> None:
        command = LambdaCommand(action)
        for name in names:
            self.bindings[name] = command


class MainMenuState(GameState):
    """Lets the player pick a game mode and start it."""

    def __init__(self, scene: Optional[list[Entity]], highscores: Optional[HighscoreManager] = None) -> None:
        super().__init__(scene)
        self.highscores = highscores
        self.game_modes = list(GAME_MODES)
        self.selected_mode = 0
        self._mode_text: Optional[Entity] = None
        self._prompt_text: Optional[Entity] = None

    @property
    def selected_mode_name(self) -> str:
        return self.game_modes[self.selected_mode]

    def on_enter(self) -> None:
        self._mode_text = self._add_label("", Vec3(70.0, 100.0, 0.0))
        self._prompt_text = self._add_label("Press A/Enter to start", Vec3(70.0, 150.0, 0.0))
        self._update_texts()
        self._bind(("left", "dpad_left"), self.prev_mode)
        self._bind(("right", "dpad_right"), self.next_mode)
        self._bind(("return", "pad_a"), self.confirm)

    def on_exit(self) -> None:
        self.bindings.clear()
        for entity in (self._mode_text, self._prompt_text):
            if entity is not None:
                entity.mark_for_destroy()

    def next_mode(self) -> None:
        self.selected_mode = (self.selected_mode + 1) % len(self.game_modes)
        self._update_texts()

    def prev_mode(self) -> None:
        self.selected_mode = (self.selected_mode - 1) % len(self.game_modes)
        self._update_texts()

    def confirm(self) -> None:
        transition = {
            0: StateTransition.TO_SINGLE_PLAYER,
            1: StateTransition.TO_CO_OP,
            3: StateTransition.TO_HIGH_SCORE,
        }.get(self.selected_mode)
        if transition is not None:
            self.requested_transition = transition

    def _update_texts(self) -> None:
        self._set_label(self._mode_text, "Game Mode: " + self.selected_mode_name)


class _EntryPhase(Enum):
    ENTER_INITIALS = auto()
    SHOW_TOP_SCORES = auto()


class HighScoreState(GameState):
    """Enters initials for a finished game, or just shows the best scores."""

    def __init__(
        self,
        score: int,
        highscores: HighscoreManager,
        view_only: bool = False,
        scene: Optional[list[Entity]] = None,
    ) -> None:
        super().__init__(scene)
        self.score = score
        self.highscores = highscores
        self.view_only = view_only
        self.phase = _EntryPhase.ENTER_INITIALS
        self._initials = ["A"] * INITIALS_LENGTH
        self.current_letter = 0
        self.entry_submitted = False
        self.top_scores: list[HighscoreEntry] = []
        self._score_text: Optional[Entity] = None
        self._initials_text: Optional[Entity] = None
        self._prompt_text: Optional[Entity] = None
        self._score_list: list[Entity] = []

    @property
    def initials(self) -> str:
        return "".join(self._initials)

    @property
    def entering_initials(self) -> bool:
        return self.phase is _EntryPhase.ENTER_INITIALS

    def on_enter(self) -> None:
        if self.view_only:
            self.highscores.load()
            self.top_scores = self.highscores.top(TOP_SCORES_SHOWN)
            self._show_top_scores()
            self.phase = _EntryPhase.SHOW_TOP_SCORES
            self.entry_submitted = True
            self._bind(("escape", "pad_b"), self.back_to_menu)
            return

        self.phase = _EntryPhase.ENTER_INITIALS
        self.current_letter = 0
        self.entry_submitted = False
        self._initials = ["A"] * INITIALS_LENGTH

        self._score_text = self._add_label(f"Your Score: {self.score}", Vec3(20.0, 60.0, 0.0))
        self._initials_text = self._add_label("", Vec3(20.0, 120.0, 0.0))
        self._prompt_text = self._add_label(
            "(Use arrows/DPAD to change, Enter/Start to submit, Esc/B to cancel)",
            Vec3(20.0, 180.0, 0.0),
        )
        self._update_initials_text()

        self._bind(("up", "dpad_up"), self.next_char)
        self._bind(("down", "dpad_down"), self.prev_char)
        self._bind(("left", "dpad_left"), self.prev_letter)
        self._bind(("right", "dpad_right"), self.next_letter)
        self._bind(("return", "pad_start"), self._submit_once)
        self._bind(("escape", "pad_b"), self.back_to_menu)

    def on_exit(self) -> None:
        self.bindings.clear()
        for entity in (self._score_text, self._initials_text, self._prompt_text, *self._score_list):
            if entity is not None:
                entity.mark_for_destroy()
        self._score_list.clear()

    def next_letter(self) -> None:
        if not self.entering_initials:
            return
        self.current_letter = (self.current_letter + 1) % INITIALS_LENGTH
        self._update_initials_text()

    def prev_letter(self) -> None:
        if not self.entering_initials:
            return
        self.current_letter = (self.current_letter - 1) % INITIALS_LENGTH
        self._update_initials_text()

    def next_char(self) -> None:
        if not self.entering_initials:
            return
        c = self._initials[self.current_letter]
        self._initials[self.current_letter] = "A" if c == "Z" else chr(ord(c) + 1)
        self._update_initials_text()

    def prev_char(self) -> None:
        if not self.entering_initials:
            return
        c = self._initials[self.current_letter]
        self._initials[self.current_letter] = "Z" if c == "A" else chr(ord(c) - 1)
        self._update_initials_text()

    def submit_score(self) -> None:
        """Store the entered initials with the score and show the best scores."""
        self.highscores.add_entry(HighscoreEntry(self.initials, self.score))
        self.top_scores = self.highscores.top(TOP_SCORES_SHOWN)
        self.phase = _EntryPhase.SHOW_TOP_SCORES
        self.entry_submitted = True
        for entity in (self._score_text, self._initials_text, self._prompt_text):
            if entity is not None:
                entity.mark_for_destroy()
        self._show_top_scores()

    def back_to_menu(self) -> None:
        self.requested_transition = StateTransition.TO_MAIN_MENU

    def _submit_once(self) -> None:
        if not self.entry_submitted:
            self.submit_score()

    def _update_initials_text(self) -> None:
        shown = "".join(
            f"[{c}]" if i == self.current_letter else f" {c} " for i, c in enumerate(self._initials)
        )
        self._set_label(self._initials_text, "Enter Initials: " + shown)

    def _show_top_scores(self) -> None:
        self._score_list.append(self._add_label("Top 3 High Scores:", Vec3(20.0, 60.0, 0.0)))
        y = 110.0
        for entry in self.top_scores:
            self._score_list.append(self._add_label(f"{entry.initials} {entry.score}", Vec3(20.0, y, 0.0)))
            y += 40.0
        self._score_list.append(self._add_label("(Press ESC or B to return)", Vec3(20.0, y + 20.0, 0.0)))


class GameOverState(GameState):
    """Clears the scene at the end of a game and waits for initials."""

    def __init__(
        self,
        scene: Optional[list[Entity]],
        final_score: int,
        highscores: Optional[HighscoreManager] = None,
    ) -> None:
        super().__init__(scene)
        self.final_score = final_score
        self.highscores = highscores
        self.current_letter_index = 0
        self.initials = "_" * INITIALS_LENGTH
        self.waiting_for_highscore = True
        self.highscore_saved = False

    def on_enter(self) -> None:
        for entity in self.scene:
            entity.mark_for_destroy()
        self.scene.clear()
        self.scene.append(Entity())
        self.scene.append(Entity())