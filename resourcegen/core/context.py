"""
Project context — which project directory the generator works in.

Set once at startup by the entry point:

    - CLI:    main.py   → context.set_project_root(root)
    - Tests:  fixtures  → context.set_project_root(tmp_path)

Use cases take an explicit ``project_root`` argument and only fall back
to this value when the caller passes None.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_project_root: Optional[Path] = None


def set_project_root(root: Path) -> None:
    """Register the project root for the current process."""
    global _project_root
    _project_root = root


def get_project_root() -> Optional[Path]:
    """Return the registered project root, or None if not set."""
    return _project_root


def resolve_project_root(root: Path | None = None) -> Path:
    """Explicit root > registered root > current directory."""
    if root is not None:
        return root
    return _project_root if _project_root is not None else Path.cwd()
