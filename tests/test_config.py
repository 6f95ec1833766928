import json

import pytest

from ableton_inspector.config import InspectorConfig, load_config


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Point the working and home directories at empty temp folders."""
    cwd = tmp_path / "cwd"
    home = tmp_path / "home"
    cwd.mkdir()
    home.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    return cwd, home


def test_from_dict_defaults():
    config = InspectorConfig.from_dict({})

    assert config.splice_paths == []
    assert config.output_format == "text"
    assert config.show_all_samples is False
    assert config.sections == ("tempo", "scale", "samples")


def test_from_dict_reads_all_keys():
    config = InspectorConfig.from_dict({
        "samplePaths": {"splice": ["/Volumes/Samples/Splice"]},
        "output": {"format": "json", "showAllSamples": True},
        "defaults": {"extractScale": False, "extractLocators": True, "extractDevices": True},
    })

    assert config.splice_paths == ["/Volumes/Samples/Splice"]
    assert config.output_format == "json"
    assert config.show_all_samples is True
    assert config.sections == ("tempo", "samples", "locators", "devices")


def test_from_dict_unknown_format_falls_back_to_text(caplog):
    config = InspectorConfig.from_dict({"output": {"format": "yaml"}})

    assert config.output_format == "text"
    assert "yaml" in caplog.text


def test_load_config_explicit_path(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"output": {"format": "json"}}))

    config = load_config(path)

    assert config.output_format == "json"
    assert config.source == path


def test_load_config_missing_explicit_path(tmp_path):
    assert load_config(tmp_path / "nope.json") is None


def test_load_config_searches_cwd_before_home(isolated_dirs):
    cwd, home = isolated_dirs
    (home / ".abletoninspectorrc").write_text(json.dumps({"output": {"format": "json"}}))
    (cwd / "abletoninspector.config.json").write_text(json.dumps({"output": {"format": "text"}}))

    config = load_config()

    assert config.source.name == "abletoninspector.config.json"
    assert config.output_format == "text"


def test_load_config_falls_back_to_home(isolated_dirs):
    _, home = isolated_dirs
    (home / ".abletoninspectorrc.json").write_text(json.dumps({"samplePaths": {"splice": ["/x"]}}))

    assert load_config().splice_paths == ["/x"]


def test_load_config_none_found(isolated_dirs):
    assert load_config() is None


def test_load_config_invalid_json_is_ignored(tmp_path, caplog):
    path = tmp_path / ".abletoninspectorrc"
    path.write_text("{not json")

    assert load_config(path) is None
    assert "Ignoring unreadable config file" in caplog.text


def test_load_config_non_object_is_ignored(tmp_path):
    path = tmp_path / ".abletoninspectorrc"
    path.write_text("[1, 2]")

    assert load_config(path) is None


def test_from_dict_drops_empty_splice_paths():
    config = InspectorConfig.from_dict({"samplePaths": {"splice": ["", "/Volumes/Splice", None]}})

    assert config.splice_paths == ["/Volumes/Splice"]
