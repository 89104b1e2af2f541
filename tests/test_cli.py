"""Tests for the command line front end."""

import os
import subprocess
import sys

import pytest
from PySide6.QtGui import QImage

from wavescribe.cli import main, build_parser, resolve_options
from .test_utils import get_repo_root, get_test_input_path, TestFiles


class TestOptions:

    def test_defaults(self):
        args = build_parser().parse_args(["-i", "in.wvy"])
        options = resolve_options(args)
        assert options.font_size == 16.0
        assert options.debug is False

    def test_flags_override_config(self):
        config = str(get_test_input_path(TestFiles.OPTIONS_YAML))
        args = build_parser().parse_args(["-i", "in.wvy", "--config", config, "--fs", "20"])
        options = resolve_options(args)
        assert options.font_size == 20.0
        assert options.debug is True

    def test_debug_flag(self):
        args = build_parser().parse_args(["-i", "in.wvy", "--debug"])
        assert resolve_options(args).debug is True


class TestMain:

    def test_render(self, qapp, tmp_path):
        output = tmp_path / "basic.png"
        code = main(["-i", str(get_test_input_path(TestFiles.BASIC_WVY)), "-o", str(output)])
        assert code == 0
        assert not QImage(str(output)).isNull()

    def test_malformed_input_fails(self, qapp, tmp_path, capsys):
        output = tmp_path / "bad.png"
        code = main(["-i", str(get_test_input_path(TestFiles.MALFORMED_WVY)), "-o", str(output)])
        assert code == 1
        assert "malformed.wvy:2" in capsys.readouterr().err
        assert not output.exists()

    def test_missing_input_fails(self, qapp, tmp_path, capsys):
        code = main(["-i", str(tmp_path / "nope.wvy"), "-o", str(tmp_path / "out.png")])
        assert code == 1
        assert "nope.wvy" in capsys.readouterr().err

    @pytest.mark.parametrize("fs", ["0", "-2", "inf", "nan"])
    def test_bad_font_size(self, qapp, tmp_path, capsys, fs):
        output = tmp_path / "out.png"
        code = main(["-i", str(get_test_input_path(TestFiles.BASIC_WVY)),
                     "-o", str(output), "--fs", fs])
        assert code == 1
        assert "font size" in capsys.readouterr().err
        assert not output.exists()

    def test_missing_config_names_config(self, qapp, tmp_path, capsys):
        code = main(["-i", str(get_test_input_path(TestFiles.BASIC_WVY)),
                     "-o", str(tmp_path / "out.png"), "--config", str(tmp_path / "nope.yaml")])
        assert code == 1
        err = capsys.readouterr().err
        assert "nope.yaml" in err
        assert "basic.wvy" not in err


def test_module_entry_point(tmp_path):
    """`python -m wavescribe` renders in a fresh headless process."""
    env = os.environ.copy()
    env.setdefault("QT_QPA_PLATFORM", "offscreen")
    output = tmp_path / "features.png"

    proc = subprocess.run(
        [sys.executable, "-m", "wavescribe",
         "-i", str(get_test_input_path(TestFiles.FEATURES_WVY)), "-o", str(output)],
        cwd=str(get_repo_root()),
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        timeout=60,
    )

    if proc.returncode != 0:
        print("STDOUT:\n" + proc.stdout)
        print("STDERR:\n" + proc.stderr)
    assert proc.returncode == 0
    assert output.exists()
