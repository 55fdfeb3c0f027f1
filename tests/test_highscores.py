from pengoslide.highscores import (
    MAX_ENTRIES,
    HighscoreEntry,
    HighscoreManager,
    pending_score,
    set_pending_score,
)


def test_file_is_created(tmp_path):
    path = tmp_path / "highscores.txt"
    HighscoreManager(path)
    assert path.read_text() == ""


def test_existing_file_is_kept(tmp_path):
    path = tmp_path / "highscores.txt"
    path.write_text("ABC 10\n")
    HighscoreManager(path)
    assert path.read_text() == "ABC 10\n"


def test_entry_is_written_in_table_format(tmp_path):
    path = tmp_path / "highscores.txt"
    manager = HighscoreManager(path)
    manager.add_entry(HighscoreEntry("ABC", 150))
    assert path.read_text() == "ABC 150\n"


def test_entries_sorted_best_first(tmp_path):
    manager = HighscoreManager(tmp_path / "hs.txt")
    for initials, score in [("AAA", 10), ("BBB", 300), ("CCC", 50)]:
        manager.add_entry(HighscoreEntry(initials, score))
    scores = [e.score for e in manager.top()]
    assert scores == sorted(scores, reverse=True)
    assert manager.top(1) == [HighscoreEntry("BBB", 300)]


def test_top_larger_than_table_and_negative(tmp_path):
    manager = HighscoreManager(tmp_path / "hs.txt")
    manager.add_entry(HighscoreEntry("AAA", 5))
    assert manager.top(50) == [HighscoreEntry("AAA", 5)]
    assert manager.top(-1) == []


def test_reload_round_trip(tmp_path):
    path = tmp_path / "hs.txt"
    first = HighscoreManager(path)
    first.add_entry(HighscoreEntry("XYZ", 70))
    first.add_entry(HighscoreEntry("QRS", 900))
    second = HighscoreManager(path)
    second.load()
    assert second.top() == first.top()


def test_load_skips_malformed_lines(tmp_path):
    path = tmp_path / "hs.txt"
    path.write_text("AAA 10\njunk\nBBB notanumber\nCCC 30\n\n")
    manager = HighscoreManager(path)
    manager.load()
    assert manager.top() == [HighscoreEntry("CCC", 30), HighscoreEntry("AAA", 10)]


def test_table_is_capped(tmp_path):
    manager = HighscoreManager(tmp_path / "hs.txt")
    for score in range(MAX_ENTRIES + 5):
        manager.add_entry(HighscoreEntry("ZZZ", score))
    entries = manager.top(MAX_ENTRIES * 2)
    assert len(entries) == 100
    assert min(e.score for e in entries) == 5


def test_save_writes_loaded_table(tmp_path):
    path = tmp_path / "hs.txt"
    path.write_text("AAA 1\nBBB 2\n")
    manager = HighscoreManager(path)
    manager.load()
    manager.save()
    assert path.read_text().splitlines() == ["BBB 2", "AAA 1"]


def test_pending_score_round_trip():
    set_pending_score(1234)
    assert pending_score() == 1234
    set_pending_score(0)
    assert pending_score() == 0