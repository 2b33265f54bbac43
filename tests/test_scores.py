from vectoroids.scores import HighScoreStore


def test_missing_file_has_no_score(tmp_path):
    assert HighScoreStore(str(tmp_path / "none.json")).load() is None


def test_save_then_load(tmp_path):
    store = HighScoreStore(str(tmp_path / "scores.json"))
    store.save(4321)
    assert store.load() == 4321


def test_corrupt_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")
    assert HighScoreStore(str(path)).load() is None
    assert "unreadable high score" in caplog.text
