"""Shared pytest fixtures for the next-fast test suite.

Provides reusable fixtures for:
- Default run / toolchain configuration
- A fake toolchain that records every external command instead of running it
- Stub ``bun`` / ``bunx`` executables for end-to-end runs
"""

from __future__ import annotations

import stat
import textwrap
from pathlib import Path

import pytest

from next_fast.config import RunConfig, ToolchainConfig


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def run_config() -> RunConfig:
    return RunConfig(project_name="my-app")


@pytest.fixture
def toolchain() -> ToolchainConfig:
    return ToolchainConfig()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep toolchain overrides from the developer's shell out of the tests."""
    for var in ("NEXT_FAST_RUNNER", "NEXT_FAST_EXECUTOR", "NEXT_FAST_SHADCN_PACKAGE"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Fake toolchain (unit tests)
# ---------------------------------------------------------------------------

class FakeTools:
    """Stands in for ``run_command`` / ``tool_available`` in ``next_fast.pipeline``.

    Successful commands mimic the filesystem effects the real tools have on
    the pipeline: ``create next-app`` makes the project directory and
    ``prisma init`` makes ``prisma/``.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.tool_checks: list[str] = []
        self.available = True
        self.create_prisma_dir = True
        self._failures: dict[tuple[str, ...], int] = {}
        self._launch_errors: set[tuple[str, ...]] = set()

    def fail(self, *prefix: str, returncode: int = 1) -> None:
        """Make any command starting with *prefix* exit with *returncode*."""
        self._failures[prefix] = returncode

    def unlaunchable(self, *prefix: str) -> None:
        """Make any command starting with *prefix* raise ``FileNotFoundError``."""
        self._launch_errors.add(prefix)

    def invoked(self, *prefix: str) -> bool:
        return any(tuple(call[: len(prefix)]) == prefix for call in self.calls)

    async def run_command(self, cmd, cwd=None, timeout=None, capture=True, env=None):
        cmd = list(cmd)
        self.calls.append(cmd)
        for prefix in self._launch_errors:
            if tuple(cmd[: len(prefix)]) == prefix:
                raise FileNotFoundError(2, "No such file or directory", cmd[0])
        for prefix, code in self._failures.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                return (code, "", "")

        if cmd[1:3] == ["create", "next-app"]:
            (Path.cwd() / cmd[3]).mkdir()
        elif cmd[1:3] == ["prisma", "init"] and self.create_prisma_dir:
            (Path.cwd() / "prisma").mkdir(exist_ok=True)
            (Path.cwd() / "prisma" / "schema.prisma").write_text("// placeholder\n")
        return (0, "", "")

    async def tool_available(self, name: str) -> bool:
        self.tool_checks.append(name)
        return self.available


@pytest.fixture
def fake_tools(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    """Run the pipeline inside *tmp_path* with every external tool faked.

    The working directory is restored after the test even though the
    pipeline changes into the generated project.
    """
    monkeypatch.chdir(tmp_path)
    tools = FakeTools()
    monkeypatch.setattr("next_fast.pipeline.run_command", tools.run_command)
    monkeypatch.setattr("next_fast.pipeline.tool_available", tools.tool_available)
    return tools


# ---------------------------------------------------------------------------
# Stub executables (integration tests)
# ---------------------------------------------------------------------------

_BUN_STUB = textwrap.dedent("""\
    #!/bin/sh
    echo "bun $*" >> "$STUB_LOG"
    if [ -n "$STUB_FAIL" ] && [ "bun $1 $2" = "$STUB_FAIL" ]; then
        exit 3
    fi
    if [ "$1" = "create" ]; then
        mkdir -p "$3"
    fi
    exit 0
""")

_BUNX_STUB = textwrap.dedent("""\
    #!/bin/sh
    echo "bunx $*" >> "$STUB_LOG"
    if [ -n "$STUB_FAIL" ] && [ "bunx $1 $2" = "$STUB_FAIL" ]; then
        exit 3
    fi
    if [ "$1 $2" = "prisma init" ]; then
        mkdir -p prisma
        echo "// generated by prisma init" > prisma/schema.prisma
    fi
    exit 0
""")


@pytest.fixture
def stub_bin(tmp_path: Path) -> Path:
    """Directory holding executable ``bun`` and ``bunx`` stubs."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    for name, body in (("bun", _BUN_STUB), ("bunx", _BUNX_STUB)):
        script = bin_dir / name
        script.write_text(body)
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return bin_dir
