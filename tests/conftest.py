"""Shared pytest configuration and fixtures for the treezip test suite.

This module provides:
- An isolated config/log directory for the whole session
- Common fixtures (editor context, sample trees, zip reader)
- Test markers
"""
import io
import os
import sys
import zipfile
from pathlib import Path

import pytest


# Add src/ to path so test modules can import the treezip package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from treezip.context import StaticEditor  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def isolated_home(tmp_path_factory):
    """Keep settings and log files out of the real user directories."""
    base = tmp_path_factory.mktemp("treezip_home")
    keys = ("XDG_DATA_HOME", "XDG_CONFIG_HOME")
    previous = {key: os.environ.get(key) for key in keys}
    os.environ["XDG_DATA_HOME"] = str(base / "data")
    os.environ["XDG_CONFIG_HOME"] = str(base / "config")
    yield base
    for key, value in previous.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def editor():
    """Provide an editor context with simple markup and styles."""
    return StaticEditor(html="<body><h1>Hello</h1></body>", css="h1{color:red}")


@pytest.fixture
def sample_tree():
    """Provide a static tree with a nested folder."""
    return {"index.html": "A", "css": {"style.css": "B"}}


@pytest.fixture
def read_zip():
    """Return a helper reading a zip blob into an ordered name -> bytes dict."""

    def _read(data: bytes):
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            return {name: zf.read(name) for name in zf.namelist()}

    return _read


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
