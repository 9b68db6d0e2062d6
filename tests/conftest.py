"""Pytest fixtures for testdoc tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
import yaml

from testdoc import document


@pytest.fixture
def doc():
    """Document with the standard element and container kinds."""
    return document()


@pytest.fixture
def sample_config() -> dict:
    """Sample testdoc.yaml configuration."""
    return {
        "tab_size": 4,
        "default_format": "md",
        "class_prefix": "docs",
        "strict": True,
    }


@pytest.fixture
def temp_config_dir(sample_config):
    """Create a temporary directory with a testdoc.yaml file."""
    with TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)

        config_path = tmpdir / "testdoc.yaml"
        with open(config_path, "w") as f:
            yaml.dump(sample_config, f)

        yield tmpdir
