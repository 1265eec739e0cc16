"""Shared test fixtures for techdebt-tracker tests."""

import ast
import os
import shutil
import textwrap
from pathlib import Path

import pytest

from techdebt_tracker.config import AnalysisConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user/project config files and TECHDEBT_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in list(os.environ):
        if key.startswith("TECHDEBT_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def config():
    """Default analysis configuration."""
    return AnalysisConfig()


@pytest.fixture
def sample_project(tmp_path):
    """Copy of tests/fixtures/sample_project in a scratch directory.

    Files (sorted): broken.py (one bad chunk), complex_module.py
    (``classify``, complexity 11), pkg/__init__.py (empty),
    pkg/service.py (class with nested async function), simple.py.
    """
    dest = tmp_path / "sample_project"
    shutil.copytree(FIXTURES_DIR / "sample_project", dest)
    return dest


@pytest.fixture
def make_project(tmp_path):
    """Factory writing {relative_path: source} into a fresh directory."""

    def _make(files, name="project"):
        root = tmp_path / name
        for rel, source in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source), encoding="utf-8")
        return root

    return _make


@pytest.fixture
def parse_fn():
    """Return the first function definition node of a source snippet."""

    def _parse(source):
        tree = ast.parse(textwrap.dedent(source))
        for node in ast.walk(tree):
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                return node
        raise AssertionError("no function in source")

    return _parse
