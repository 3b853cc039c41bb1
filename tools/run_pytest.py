"""Run the Hearth test-suite, preferring a project virtualenv interpreter."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

VENV_DIRS = (".venv", "venv")


def find_interpreter(root: Path) -> str:
    bin_dir, executable = ("Scripts", "python.exe") if os.name == "nt" else ("bin", "python")
    for name in VENV_DIRS:
        candidate = root / name / bin_dir / executable
        if candidate.exists():
            return str(candidate)
    return sys.executable


def main(argv: list[str] | None = None) -> int:
    root = Path(__file__).resolve().parents[1]
    args = list(argv or []) or ["tests"]
    env = dict(os.environ)
    env.setdefault("PYTHONPATH", str(root))
    return subprocess.call([find_interpreter(root), "-m", "pytest", "-q", *args], cwd=root, env=env)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
