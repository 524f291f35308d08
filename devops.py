"""Developer tasks for coreupdater.

Usage: python devops.py <task>
Tasks: fmt, lint, test, clean
"""

import subprocess
import sys


def _run(commands: list[list[str]]) -> None:
    """Run commands in order, stopping at the first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format sources and apply safe lint fixes."""
    _run([["ruff", "format", "app", "tests"], ["ruff", "check", "--fix", "app", "tests"]])


def lint() -> None:
    """Check formatting and lint rules without changing files."""
    _run([["ruff", "format", "--check", "app", "tests"], ["ruff", "check", "app", "tests"]])


def test() -> None:
    """Run the unit test suite."""
    _run([[sys.executable, "-m", "pytest", "-q"]])


def clean() -> None:
    """Remove caches and build artifacts."""
    _run(
        [
            ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
            ["rm", "-rf", ".pytest_cache", ".ruff_cache", "build", "dist"],
            ["find", ".", "-type", "d", "-name", "*.egg-info", "-exec", "rm", "-rf", "{}", "+"],
        ]
    )


TASKS = {
    "fmt": format_code,
    "lint": lint,
    "test": test,
    "clean": clean,
}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
