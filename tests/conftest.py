"""Common test fixtures for wavescribe tests."""

import os

# Qt must not look for a display when tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from wavescribe import RenderOptions, compile_text
from .test_utils import get_test_input_path, TestFiles


@pytest.fixture
def basic_text():
    """Clock, spacer and one data track."""
    return get_test_input_path(TestFiles.BASIC_WVY).read_text()


@pytest.fixture
def features_text():
    """Document exercising clocks with phase, buses, ramps and tri-state."""
    return get_test_input_path(TestFiles.FEATURES_WVY).read_text()


@pytest.fixture
def options():
    return RenderOptions(font_size=16.0)


@pytest.fixture
def basic_diagram(basic_text, options):
    return compile_text(basic_text, "basic.wvy", options)
