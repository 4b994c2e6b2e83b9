import json

import settings


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"SHOW_DETAILS": "yes", "RED_CHANNEL_SOURCE": "A"}), encoding="utf-8")

    assert settings._load_config(str(path)) == {"SHOW_DETAILS": "yes", "RED_CHANNEL_SOURCE": "A"}


def test_load_config_missing_file_uses_defaults(tmp_path):
    assert settings._load_config(str(tmp_path / "config.json")) == {}


def test_as_bool_string_values():
    assert settings._as_bool("True")
    assert settings._as_bool(" on ")
    assert not settings._as_bool("False")
    assert not settings._as_bool("")
    assert not settings._as_bool(None)
