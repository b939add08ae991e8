"""Project directory layout: locating ``.autotask/`` and writing its files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

AUTOTASK_DIR = ".autotask"
AUTOTASK_ROOT_ENV = "AUTOTASK_ROOT"


class AutotaskRootError(Exception):
    """Raised when AUTOTASK_ROOT env var is set but invalid."""


def atomic_write(path: Path, text: str) -> None:
    """Replace *path* with *text* (UTF-8) so readers never see a partial file.

    A provider re-reading the catalog while ``init`` writes it sees either the
    previous file or the complete new one.
    """
    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        os.unlink(tmp.name)
        raise


def ensure_autotask_dir(root: Path) -> Path:
    """Create ``.autotask/`` under *root* if needed and return its path."""
    autotask_dir = root / AUTOTASK_DIR
    autotask_dir.mkdir(parents=True, exist_ok=True)
    return autotask_dir


def _root_from_env(value: str) -> Path:
    if not value:
        raise AutotaskRootError(f"{AUTOTASK_ROOT_ENV} is set but empty")
    root = Path(value)
    if not root.is_dir():
        raise AutotaskRootError(
            f"{AUTOTASK_ROOT_ENV} points to a path that does not exist: {value}"
        )
    if not (root / AUTOTASK_DIR).is_dir():
        raise AutotaskRootError(
            f"{AUTOTASK_ROOT_ENV} points to a directory with no {AUTOTASK_DIR}/ inside: {value}"
        )
    return root


def find_root(start: Path | None = None) -> Path | None:
    """Return the nearest directory holding ``.autotask/``, or ``None``.

    ``AUTOTASK_ROOT``, when set, is authoritative: an invalid value raises
    :class:`AutotaskRootError` instead of falling back to the directory walk.
    """
    env_value = os.environ.get(AUTOTASK_ROOT_ENV)
    if env_value is not None:
        return _root_from_env(env_value)

    here = (start or Path.cwd()).resolve()
    return next((d for d in (here, *here.parents) if (d / AUTOTASK_DIR).is_dir()), None)
