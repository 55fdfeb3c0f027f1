"""Sound output and the observer that turns game events into sounds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from pengoslide.world import GameEvent

PLAYER_DIE_SOUND = 2
ENEMY_DIE_SOUND = 3
EFFECT_VOLUME = 0.5
MUSIC_TRACK = "PengoMain.ogg"
MUSIC_VOLUME = 0.5


class SoundSystem(ABC):
    """Where sound effects and music are sent."""

    @abstractmethod
    def load_sound(self, name: str, sound_id: int) -> None: ...

    @abstractmethod
    def play(self, sound_id: int, volume: float) -> None: ...

    @abstractmethod
    def play_music(self, name: str, volume: float, loop: bool) -> None: ...

    @abstractmethod
    def stop_music(self) -> None: ...

    @abstractmethod
    def toggle_mute(self) -> None: ...

    @abstractmethod
    def set_master_volume(self, volume: float) -> None: ...


class SilentSoundSystem(SoundSystem):
    """A sound system that makes no noise and remembers what it was asked to do."""

    def __init__(self) -> None:
        self.sounds: dict[int, str] = {}
        self.played: list[tuple[int, float]] = []
        self.music: Optional[tuple[str, float, bool]] = None
        self.muted = False
        self.master_volume = 1.0

    def load_sound(self, name: str, sound_id: int) -> None:
        self.sounds[sound_id] = name

    def play(self, sound_id: int, volume: float) -> None:
        self.played.append((sound_id, volume))

    def play_music(self, name: str, volume: float, loop: bool) -> None:
        self.music = (name, volume, loop)

    def stop_music(self) -> None:
        self.music = None

    def toggle_mute(self) -> None:
        self.muted = not self.muted

    def set_master_volume(self, volume: float) -> None:
        self.master_volume = volume


class SoundPlayer:
    """Plays the matching sound when a watched subject reports an event."""

    def __init__(self, sound_system: SoundSystem) -> None:
        self.sound_system = sound_system
        self.subjects: list[Any] = []
        sound_system.load_sound("PlayerDie.wav", PLAYER_DIE_SOUND)
        sound_system.load_sound("EnemyDie.wav", ENEMY_DIE_SOUND)

    def on_notify(self, subject: Any, event: GameEvent) -> None:
        if event is GameEvent.SUBJECT_ATTACHED:
            self.subjects.append(subject)
        elif event is GameEvent.PLAYER_DIED:
            self.sound_system.play(PLAYER_DIE_SOUND, EFFECT_VOLUME)
        elif event is GameEvent.ENEMY_DIED:
            self.sound_system.play(ENEMY_DIE_SOUND, EFFECT_VOLUME)
        elif event is GameEvent.PLAY:
            self.sound_system.play_music(MUSIC_TRACK, MUSIC_VOLUME, True)