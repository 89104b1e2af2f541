"""Tests for saving and loading rendering options."""

import pytest

from wavescribe.config import RenderOptions, DEFAULT_FONT_SIZE
from wavescribe.errors import ConfigError
from wavescribe.persistence import load_options, save_options, options_from_dict
from .test_utils import get_test_input_path, TestFiles


class TestPersistence:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "options.yaml"
        options = RenderOptions(font_size=20.0, debug=True, trace_color="#ff0000")
        save_options(options, path)
        assert load_options(path) == options

    def test_load_sample(self):
        options = load_options(get_test_input_path(TestFiles.OPTIONS_YAML))
        assert options.font_size == 12.0
        assert options.debug is True

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        options = load_options(path)
        assert options.font_size == DEFAULT_FONT_SIZE
        assert options.debug is False

    def test_integer_font_size_accepted(self):
        assert options_from_dict({'font_size': 10}).font_size == 10.0

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("font_sise: 12\n")
        with pytest.raises(ConfigError) as exc_info:
            load_options(path)
        assert "font_sise" in str(exc_info.value)

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_options(path)

    def test_invalid_font_size_rejected(self):
        with pytest.raises(ConfigError):
            options_from_dict({'font_size': -3})
        with pytest.raises(ConfigError):
            options_from_dict({'font_size': 'large'})
        with pytest.raises(ConfigError):
            options_from_dict({'font_size': float('inf')})
        with pytest.raises(ConfigError):
            options_from_dict({'font_size': True})

    @pytest.mark.parametrize("value", ["no", "false", 0, 1, None])
    def test_non_bool_debug_rejected(self, value):
        with pytest.raises(ConfigError) as exc_info:
            options_from_dict({'debug': value})
        assert "debug" in str(exc_info.value)

    def test_quoted_debug_in_yaml_rejected(self, tmp_path):
        path = tmp_path / "quoted.yaml"
        path.write_text('debug: "no"\n')
        with pytest.raises(ConfigError):
            load_options(path)

    def test_yaml_bool_debug_accepted(self, tmp_path):
        path = tmp_path / "plain.yaml"
        path.write_text("debug: no\n")
        assert load_options(path).debug is False

    @pytest.mark.parametrize("color", ["#00ff00", "red", "#80ff0000"])
    def test_valid_trace_color(self, color):
        assert options_from_dict({'trace_color': color}).trace_color == color

    @pytest.mark.parametrize("color", ["bluish", "#12345", "", 255])
    def test_invalid_trace_color_rejected(self, color):
        with pytest.raises(ConfigError) as exc_info:
            options_from_dict({'trace_color': color}, "opts.yaml")
        assert "trace_color" in str(exc_info.value)
        assert "opts.yaml" in str(exc_info.value)

    def test_non_string_font_family_rejected(self):
        with pytest.raises(ConfigError):
            options_from_dict({'font_family': 12})
