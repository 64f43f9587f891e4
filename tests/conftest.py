"""
Pytest configuration and shared fixtures for sraprep tests.

This module provides common fixtures used across all test modules,
including temporary directories, fixture data paths and a fake tool
environment that stands in for prefetch / fasterq-dump.

Note: The sraprep package must be installed in development mode first:
    pip install -e .
"""

import pytest
import tempfile
import shutil
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    # Cleanup after test
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def runinfo_path(fixtures_dir):
    """Return path to a runinfo CSV as printed by efetch -format runinfo."""
    return fixtures_dir / "runinfo.csv"


@pytest.fixture
def test_config_path(fixtures_dir):
    """Return path to test config file."""
    return fixtures_dir / "test_config.yaml"


class FakeEnvironment:
    """
    Records tool calls instead of running them.

    fasterq-dump calls create <acc>_1.fastq and <acc>_2.fastq in cwd, except
    for accessions listed in single_end, which only get <acc>_1.fastq.
    """

    def __init__(self, single_end=(), missing_tools=(), fail_on=None):
        self.single_end = set(single_end)
        self.missing_tools = set(missing_tools)
        self.fail_on = fail_on
        self.calls = []
        self.active = False
        self.entered = 0
        self.exited = 0

    def __enter__(self):
        self.active = True
        self.entered += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self.active = False
        self.exited += 1
        return False

    def require(self, *tools):
        from sraprep.errors import ToolNotFoundError
        for tool in tools:
            if tool in self.missing_tools:
                raise ToolNotFoundError(tool, "sra-tools", "sra-env")
        return {tool: f"/fake/bin/{tool}" for tool in tools}

    def run(self, cmd, cwd=None, **kwargs):
        import subprocess
        assert self.active, "tool run outside the environment"
        self.calls.append((list(cmd), Path(cwd) if cwd else None))
        if self.fail_on and cmd[-1] == self.fail_on:
            raise subprocess.CalledProcessError(3, cmd)
        if cmd[0] == "fasterq-dump":
            acc = cmd[-1]
            (Path(cwd) / f"{acc}_1.fastq").write_text(f"@{acc}.1\nACGT\n+\nIIII\n")
            if acc not in self.single_end:
                (Path(cwd) / f"{acc}_2.fastq").write_text(f"@{acc}.1\nTGCA\n+\nIIII\n")
        return subprocess.CompletedProcess(cmd, 0)


@pytest.fixture
def fake_env():
    """Fake tool environment with every tool present."""
    return FakeEnvironment()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI tests call setup_logging, which replaces the root handlers."""
    import logging
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
