import pytest

from pengoslide.sound import SilentSoundSystem, SoundPlayer, SoundSystem
from pengoslide.world import GameEvent, Subject


def test_sound_player_loads_its_sounds():
    system = SilentSoundSystem()
    SoundPlayer(system)
    assert system.sounds == {2: "PlayerDie.wav", 3: "EnemyDie.wav"}


def test_player_death_plays_sound_two():
    system = SilentSoundSystem()
    player = SoundPlayer(system)
    player.on_notify(None, GameEvent.PLAYER_DIED)
    assert system.played == [(2, 0.5)]


def test_enemy_death_plays_sound_three():
    system = SilentSoundSystem()
    player = SoundPlayer(system)
    player.on_notify(None, GameEvent.ENEMY_DIED)
    assert system.played == [(3, 0.5)]


def test_play_event_starts_music():
    system = SilentSoundSystem()
    player = SoundPlayer(system)
    player.on_notify(None, GameEvent.PLAY)
    assert system.music == ("PengoMain.ogg", 0.5, True)


def test_attaching_records_subject_without_sound():
    system = SilentSoundSystem()
    player = SoundPlayer(system)
    subject = Subject()
    subject.attach_observer(player)
    assert player.subjects == [subject]
    assert system.played == []


def test_notifications_through_subject_reach_sound_system():
    system = SilentSoundSystem()
    player = SoundPlayer(system)
    subject = Subject()
    subject.attach_observer(player)
    subject.notify(GameEvent.ENEMY_DIED)
    subject.notify(GameEvent.PLAYER_DIED)
    assert system.played == [(3, 0.5), (2, 0.5)]


def test_silent_system_mute_toggles_back():
    system = SilentSoundSystem()
    system.toggle_mute()
    assert system.muted is True
    system.toggle_mute()
    assert system.muted is False


def test_silent_system_music_and_volume():
    system = SilentSoundSystem()
    system.play_music("track.ogg", 0.3, False)
    assert system.music == ("track.ogg", 0.3, False)
    system.stop_music()
    assert system.music is None
    system.set_master_volume(0.25)
    assert system.master_volume == 0.25


def test_sound_system_is_abstract():
    with pytest.raises(TypeError):
        SoundSystem()