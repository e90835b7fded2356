import json
import os

import pytest

from graphexport.config import DEFAULT_CONFIG, load_config, save_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GRAPHEXPORT_CONFIG", "GRAPHEXPORT_DELIMITER", "GRAPHEXPORT_ARRAY_DELIMITER"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_no_file(tmp_path):
    assert load_config(tmp_path / "missing.json") == DEFAULT_CONFIG


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"delimiter": ";", "edges_filename": "rels.csv"}), encoding="utf-8")

    config = load_config(path)
    assert config["delimiter"] == ";"
    assert config["edges_filename"] == "rels.csv"
    assert config["nodes_filename"] == DEFAULT_CONFIG["nodes_filename"]


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"delimiter": ";"}), encoding="utf-8")
    monkeypatch.setenv("GRAPHEXPORT_DELIMITER", "\t")

    assert load_config(path)["delimiter"] == "\t"


def test_invalid_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"colour": "blue"}), encoding="utf-8")
    assert "colour" not in load_config(path)


def test_bad_delimiter_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"array_delimiter": ""}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_save_and_reload(tmp_path):
    path = tmp_path / "config.json"
    config = dict(DEFAULT_CONFIG, delimiter="|")
    save_config(config, path)

    assert load_config(path) == config


def test_env_file_is_read_without_touching_environ(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GRAPHEXPORT_DELIMITER=|\n", encoding="utf-8")

    assert load_config(tmp_path / "missing.json")["delimiter"] == ","
    assert load_config(tmp_path / "missing.json", env_file=env_file)["delimiter"] == "|"
    assert "GRAPHEXPORT_DELIMITER" not in os.environ


def test_process_env_beats_env_file(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("GRAPHEXPORT_DELIMITER=|\n", encoding="utf-8")
    monkeypatch.setenv("GRAPHEXPORT_DELIMITER", ";")

    assert load_config(tmp_path / "missing.json", env_file=env_file)["delimiter"] == ";"


@pytest.mark.parametrize("overrides", [
    {"nodes_filename": 42},
    {"edges_filename": ""},
    {"encoding": "no-such-codec"},
    {"encoding": None},
])
def test_bad_file_settings_rejected(tmp_path, overrides):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(overrides), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
