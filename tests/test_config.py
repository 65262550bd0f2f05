"""Test cases for configuration loading."""

import json

import pytest

from coursebook.config import CoursebookConfig, load_config
from coursebook.core.exceptions import ConfigurationError
from coursebook.main import CoursebookPlatform


class TestLoadConfig:

    def test_defaults(self):
        config = load_config(environ={})
        assert config == CoursebookConfig()
        assert config.rest_port == 8000

    def test_from_file(self, tmp_path):
        path = tmp_path / "coursebook.json"
        path.write_text(json.dumps({"course_name": "Databases", "term": "2026-2", "rest_port": 9000}))
        config = load_config(str(path), environ={})
        assert config.course_name == "Databases"
        assert config.term == "2026-2"
        assert config.rest_port == 9000

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "coursebook.json"
        path.write_text(json.dumps({"owner": "file-owner"}))
        config = load_config(str(path), environ={"COURSEBOOK_OWNER": "env-owner", "COURSEBOOK_LOG_LEVEL": "debug"})
        assert config.owner == "env-owner"
        assert config.log_level == "DEBUG"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(str(tmp_path / "missing.json"), environ={})

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "coursebook.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError):
            load_config(str(path), environ={})

    @pytest.mark.parametrize("overrides", [
        {"COURSEBOOK_REST_PORT": "0"},
        {"COURSEBOOK_COURSE_NAME": ""},
        {"COURSEBOOK_LOG_LEVEL": "chatty"},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError):
            load_config(environ=overrides)


class TestPlatform:

    def test_platform_builds_course_from_config(self):
        platform = CoursebookPlatform(CoursebookConfig(course_name="Databases", owner="dean"))
        info = platform.service.course_info()
        assert info['name'] == "Databases"
        assert info['owner'] == "dean"

    def test_demo_closes_course(self, capsys):
        platform = CoursebookPlatform(CoursebookConfig())
        platform.run_demo()
        output = capsys.readouterr().out
        assert "alice: 7.20" in output
        assert "bob: 4.99" in output
        assert "course_closed" in output
        assert platform.service.course.closed
