import logging
import os
import pathlib
import stat
import sys
from dataclasses import dataclass

import pytest

# Ensure project root is in sys.path
repo_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

ENV_KEYS = (
    "LAUNCHER_INTERPRETER",
    "LAUNCHER_SCRIPT",
    "LAUNCHER_RESOURCES_SUFFIX",
    "LAUNCHER_EXIT_POLICY",
    "LAUNCHER_CHUNK_SIZE",
    "LAUNCHER_DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """
    Keeps tests away from the real user data directory and launcher
    settings, and restores the working directory and root logger.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("APPDATA", str(home / "AppData" / "Roaming"))
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    # Registers the current directory for restoration on teardown
    monkeypatch.chdir(os.getcwd())

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@dataclass
class FakeBundle:
    """A bundle laid out the way the launcher expects it."""

    root: pathlib.Path

    @property
    def executable_dir(self) -> pathlib.Path:
        return self.root / "Contents" / "MacOS"

    @property
    def executable(self) -> str:
        return str(self.executable_dir / "launcher")

    @property
    def resources_dir(self) -> pathlib.Path:
        return self.root / "Contents" / "Resources" / "app"

    @property
    def interpreter(self) -> pathlib.Path:
        return self.root / "Contents" / "Resources" / "libs" / "bin" / "python3"

    @property
    def script(self) -> pathlib.Path:
        return self.resources_dir / "app.py"

    def write_script(self, source: str) -> None:
        self.script.write_text(source, encoding="utf-8")

    def install_interpreter(self) -> None:
        """Installs a wrapper that forwards to the test interpreter."""
        self.interpreter.parent.mkdir(parents=True, exist_ok=True)
        self.interpreter.write_text(
            f'#!/bin/sh\nexec "{sys.executable}" "$@"\n', encoding="utf-8"
        )
        mode = self.interpreter.stat().st_mode
        self.interpreter.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def fake_bundle(tmp_path):
    """
    Provides a bundle with an executable directory, a resources directory
    holding app.py and a working bundled interpreter.
    """
    bundle = FakeBundle(tmp_path / "Bundle.app")
    bundle.executable_dir.mkdir(parents=True)
    bundle.resources_dir.mkdir(parents=True)
    bundle.write_script("import sys\n")
    bundle.install_interpreter()
    return bundle
