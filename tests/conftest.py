"""Pytest configuration and shared fixtures."""

import io
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from batch_shell.config import reset_settings
from batch_shell.exceptions import LaunchFailure, WaitFailure
from batch_shell.utils.logger import setup_logger

# Quoted: the interpreter path may contain spaces.
PYTHON = f'"{sys.executable}"'


def py(code: str) -> str:
    """Command line running a Python snippet in a child interpreter."""
    return f'{PYTHON} -c "{code}"'


@dataclass
class FakeHandle:
    """Stand-in for ProcessHandle."""

    argv: list[str]
    pid: int
    reaped: bool = False


@dataclass
class FakeLauncher:
    """Launcher recording launches and waits instead of spawning processes.

    ``exit_codes`` maps a program name to its exit status (default 0);
    programs in ``missing`` fail to launch with status 127.
    """

    exit_codes: dict[str, int] = field(default_factory=dict)
    missing: set[str] = field(default_factory=set)
    events: list[tuple[str, list[str]]] = field(default_factory=list)

    def launch(self, argv: Sequence[str]) -> FakeHandle:
        argv = list(argv)
        self.events.append(("launch", argv))
        if argv[0] in self.missing:
            raise LaunchFailure(f"command not found: {argv[0]}", exit_code=127)
        return FakeHandle(argv=argv, pid=1000 + len(self.events))

    def wait(self, handle: FakeHandle) -> int:
        if handle.reaped:
            raise WaitFailure(f"process {handle.pid} has already been reaped")
        handle.reaped = True
        self.events.append(("wait", handle.argv))
        return self.exit_codes.get(handle.argv[0], 0)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep configuration discovery away from the developer's real files.

    The logger is re-pointed at the current stderr, since a CLI test may have
    left it writing to a closed runner stream.
    """
    monkeypatch.delenv("BATCH_SHELL_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_settings()
    setup_logger()
    yield
    reset_settings()


@pytest.fixture
def py_cmd() -> Callable[[str], str]:
    """Provide the child-interpreter command line builder."""
    return py


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    """Provide a recording launcher."""
    return FakeLauncher()


@pytest.fixture
def output() -> io.StringIO:
    """Provide an output stream for batch reports."""
    return io.StringIO()


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing command scripts into the temporary directory."""

    def _write(name: str, *lines: str) -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_config(tmp_path: Path) -> Path:
    """Create a sample configuration file."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
version: "1.0"

shell:
  prompt: "$ "
  max_depth: 4

logging:
  level: "ERROR"
""")
    return config_file
