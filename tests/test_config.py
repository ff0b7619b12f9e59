import json

import pytest

from assignment_tracker.config import TrackerSettings, load_config_file, load_settings
from assignment_tracker.core.exceptions import ConfigurationError


def test_defaults():
    settings = load_settings()
    assert settings.work_delay == 0.5
    assert settings.grading_delay == 0.5
    assert settings.pass_threshold == 50
    assert (settings.min_grade, settings.max_grade) == (0, 100)
    assert settings.random_seed is None


def test_load_from_dict_and_passthrough():
    settings = load_settings({'work_delay': 0.1, 'random_seed': 3})
    assert settings.work_delay == 0.1
    assert load_settings(settings) is settings


@pytest.mark.parametrize("config", [
    {'work_delay': -1},
    {'min_grade': 90, 'max_grade': 10},
    {'unknown_key': 1},
    {'grading_delay': "soon"},
])
def test_invalid_config(config):
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(config)
    assert excinfo.value.error_code == "invalid_config"
    assert excinfo.value.details['errors']


def test_settings_are_frozen():
    settings = TrackerSettings()
    with pytest.raises(Exception):
        settings.work_delay = 2


def test_load_config_file(tmp_path):
    path = tmp_path / "tracker.json"
    path.write_text(json.dumps({'grading_delay': 0.2}))
    assert load_config_file(str(path)) == {'grading_delay': 0.2}


def test_load_config_file_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config_file(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_config_file(str(bad))

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]")
    with pytest.raises(ConfigurationError):
        load_config_file(str(listing))
