"""Shared fixtures for seavan tests."""

from pathlib import Path

import pytest

from seavan.executor import CommandResult


class FakeExecutor:
    """Executor that records invocations instead of running a build tool.

    The manifest passed via --file is read during the call, since it is
    removed as soon as the build returns.
    """

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = ""):
        self.program = "fake-builder"
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[dict] = []

    def run(self, args: list[str], cwd: Path) -> CommandResult:
        manifest_path = Path(args[args.index("--file") + 1])
        self.calls.append(
            {
                "args": list(args),
                "cwd": cwd,
                "manifest_path": manifest_path,
                "manifest": manifest_path.read_text(encoding="utf-8"),
                "tag": args[args.index("--tag") + 1],
                "context": args[-1],
            }
        )
        return CommandResult(
            args=[self.program, *args],
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
        )


@pytest.fixture
def fake_executor():
    """Executor whose builds always succeed."""
    return FakeExecutor()


@pytest.fixture
def failing_executor():
    """Executor whose builds always fail."""
    return FakeExecutor(
        returncode=1,
        stderr="step 1/2 ok\nERROR: failed to compute cache key: README.md not found\n",
    )


@pytest.fixture
def readme(tmp_path):
    """A README.md file in its own directory."""
    path = tmp_path / "README.md"
    path.write_text("# Hello\n")
    return path
