"""Pytest configuration and shared fixtures for termtree tests."""

import os
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

PEOPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<mapper name="people" path="people">
  <mapper name="person" required="true">
    <attribute name="type" value="personal"/>
    <mapper name="title" path="@title"/>
    <mapper name="given_name" path="namePart" type="text">
      <attribute name="type" value="given"/>
    </mapper>
  </mapper>
</mapper>
"""

PEOPLE_YAML = """\
name: people
children:
  - name: person
    required: "true"
    attributes:
      type: personal
    children:
      - name: title
        path: "@title"
      - name: given_name
        path: namePart
        type: text
        attributes:
          - name: type
            value: given
"""


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env() -> Generator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Saves current environment and restores after test.
    """
    original_env = os.environ.copy()
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def people_xml_file(temp_dir: Path) -> Path:
    """Write the people XML definition to a temporary file."""
    path = temp_dir / "people.xml"
    path.write_text(PEOPLE_XML, encoding="utf-8")
    return path


@pytest.fixture
def people_yaml_file(temp_dir: Path) -> Path:
    """Write the people YAML definition to a temporary file."""
    path = temp_dir / "people.yaml"
    path.write_text(PEOPLE_YAML, encoding="utf-8")
    return path


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch: Any) -> Path:
    """Point HOME at an empty directory and clear TERMTREE_* variables."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("TERMTREE_"):
            monkeypatch.delenv(key)
    return home


# Configure pytest
def pytest_configure(config: Any) -> None:
    """Configure pytest with marker options."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )
