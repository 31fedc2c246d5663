# yeargrid/util/console.py
from __future__ import annotations
import sys
from typing import Any

PREFIX = "[yeargrid]"


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def warn(msg: str) -> None:
    eprint(f"{PREFIX} WARN: {msg}")
