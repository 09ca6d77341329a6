"""
Tests for configuration loading and validation.
"""

import json

import pytest

from gocyclo.config import (
    AnalysisConfig,
    find_config,
    load_analysis_config,
    load_config,
    parse_breakpoints,
)
from gocyclo.core.exceptions import ConfigError
from gocyclo.utils.files import regex_filter


class TestAnalysisConfig:
    """Tests for the AnalysisConfig value."""

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.over == 0
        assert config.under == 0
        assert config.top == -1
        assert config.max_workers == 4
        assert not config.wants_report

    def test_from_dict_aliases(self):
        config = AnalysisConfig.from_dict({
            "paths": "./src",
            "report": [10, 5],
            "jobs": 2,
            "avg_short": True,
            "format": "json",
            "unknown_key": 1,
        })
        assert config.paths == ["./src"]
        assert config.breakpoints == [10, 5]
        assert config.max_workers == 2
        assert config.show_average and config.average_short
        assert config.output_format == "json"

    def test_report_string(self):
        assert AnalysisConfig.from_dict({"report": "1,5,10"}).breakpoints == [1, 5, 10]

    def test_rejects_non_integer_threshold(self):
        with pytest.raises(ConfigError):
            AnalysisConfig(over="ten")

    def test_rejects_bool_threshold(self):
        with pytest.raises(ConfigError):
            AnalysisConfig(top=True)

    def test_rejects_unknown_format(self):
        with pytest.raises(ConfigError):
            AnalysisConfig(output_format="xml")

    def test_rejects_non_string_ignore(self):
        with pytest.raises(ConfigError):
            AnalysisConfig.from_dict({"ignore": 5})

    def test_rejects_scalar_report(self):
        with pytest.raises(ConfigError):
            AnalysisConfig.from_dict({"report": 5})

    def test_rejects_non_string_paths(self):
        with pytest.raises(ConfigError):
            AnalysisConfig.from_dict({"paths": [1]})

    def test_rejects_non_bool_switch(self):
        with pytest.raises(ConfigError):
            AnalysisConfig(include_literals="yes")

    def test_merged_ignores_none(self):
        base = AnalysisConfig(over=10, ignore="vendor")
        merged = base.merged({"over": None, "top": 3, "ignore": None})
        assert merged.over == 10
        assert merged.top == 3
        assert merged.ignore == "vendor"


class TestParsing:
    """Tests for value parsing helpers."""

    def test_parse_breakpoints(self):
        assert parse_breakpoints("5, 10,20") == [5, 10, 20]

    def test_parse_breakpoints_invalid(self):
        with pytest.raises(ConfigError):
            parse_breakpoints("5,ten")

    def test_regex_filter(self):
        excluded = regex_filter(r"_test\.go$")
        assert excluded("pkg/a_test.go")
        assert not excluded("pkg/a.go")

    def test_empty_regex_means_no_filter(self):
        assert regex_filter("") is None
        assert regex_filter(None) is None

    def test_invalid_regex(self):
        with pytest.raises(ConfigError):
            regex_filter("(")


class TestConfigFiles:
    """Tests for config file discovery and loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / ".gocyclo.yaml"
        path.write_text("over: 15\nignore: vendor/\nreport: [5, 10]\n")
        config = load_analysis_config(str(path))
        assert config.over == 15
        assert config.ignore == "vendor/"
        assert config.breakpoints == [5, 10]

    def test_load_json(self, tmp_path):
        path = tmp_path / ".gocyclo.json"
        path.write_text(json.dumps({"top": 5}))
        assert load_analysis_config(str(path)).top == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("over: [1\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "bin.yaml"
        path.write_bytes(b"over: \xff\xfe\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_find_config_searches_upward(self, tmp_path):
        (tmp_path / ".gocyclo.yml").write_text("top: 1\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(str(nested)) == str(tmp_path / ".gocyclo.yml")

    def test_no_config_gives_defaults(self, tmp_path):
        config = load_analysis_config(start_dir=str(tmp_path))
        assert config == AnalysisConfig()
