import json

from agenda.storage.config import AppConfig, load_config, save_config, update_config


def test_missing_config_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "config.json")
    assert cfg == AppConfig(last_viewed_date=None, default_priority="normal")


def test_save_and_update_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    save_config(AppConfig(last_viewed_date="2024-01-01", default_priority="high"), path)

    cfg = update_config(path, last_viewed_date="2024-01-02", unknown="ignored")

    assert cfg.last_viewed_date == "2024-01-02"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "default_priority": "high",
        "last_viewed_date": "2024-01-02",
    }
    assert not path.with_suffix(".tmp").exists()


def test_corrupt_config_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_config(path).default_priority == "normal"


def test_invalid_priority_is_normalized(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default_priority": "URGENT"}), encoding="utf-8")
    assert load_config(path).default_priority == "normal"
