#!/usr/bin/env python3
"""
Fail if core reaches the network outside the client module.
Checks all Python files under src/hyper_resource/core/: only client.py may
import httpx, and no module may pull in another HTTP stack.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "hyper_resource" / "core"

FORBIDDEN_PREFIXES = (
    "requests",
    "aiohttp",
    "urllib3",
    "urllib.request",
    "http.client",
)

CLIENT_ONLY_PREFIXES = ("httpx",)

CLIENT_MODULE = "client.py"


def _matches(module: str, prefixes: tuple[str, ...]) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".") for prefix in prefixes
    )


def is_forbidden(module: str, path: Path) -> bool:
    if _matches(module, FORBIDDEN_PREFIXES):
        return True
    return path.name != CLIENT_MODULE and _matches(module, CLIENT_ONLY_PREFIXES)


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                mod = alias.name
                if is_forbidden(mod, path):
                    errors.append(f"{path}: forbidden import '{mod}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            if node.level == 0 and mod and is_forbidden(mod, path):
                errors.append(f"{path}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in CORE_DIR.rglob("*.py"):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
