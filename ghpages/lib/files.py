"""File selection and copying for a publish."""

import logging
import shutil
from pathlib import Path

from ghpages.lib.errors import ConfigError

logger = logging.getLogger(__name__)


def _is_hidden(relpath: Path) -> bool:
    return any(part.startswith(".") for part in relpath.parts)


def _skip(relpath: Path, dotfiles: bool) -> bool:
    # Repository metadata is never published or removed
    if ".git" in relpath.parts:
        return True
    return not dotfiles and _is_hidden(relpath)


def match_files(base: Path, patterns: list[str], dotfiles: bool = False) -> list[str]:
    """
    Find files under `base` matching any glob pattern.

    Directories are never returned; a pattern like "**/*" selects every file
    beneath them instead.

    Returns:
        Sorted POSIX-style paths relative to base
    """
    found = set()
    for pattern in patterns:
        for path in base.glob(pattern):
            if not path.is_file():
                continue
            relpath = path.relative_to(base)
            if _skip(relpath, dotfiles):
                continue
            found.add(relpath.as_posix())
    return sorted(found)


def match_removals(root: Path, dest: str, pattern: str, dotfiles: bool = False) -> list[str]:
    """
    Find existing paths in the working copy to remove before copying.

    Returns:
        Paths relative to the working copy root, suitable for `git rm`
    """
    target = root / dest
    if not target.exists():
        return []

    if pattern == ".":
        return [Path(dest).as_posix()]

    removals = []
    for path in sorted(target.glob(pattern)):
        relpath = path.relative_to(target)
        if _skip(relpath, dotfiles):
            continue
        removals.append((Path(dest) / relpath).as_posix())
    return removals


def copy_files(files: list[str], base: Path, dest: Path) -> None:
    """Copy files (relative to base) into dest, creating directories as needed."""
    for name in files:
        src = base / name
        target = dest / name
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, target)
    logger.debug(f"Copied {len(files)} files into {dest}")


def require_files(base: Path, patterns: list[str], dotfiles: bool = False) -> list[str]:
    """
    Match files for publishing, failing if there is nothing to publish.

    Raises:
        ConfigError: if base is not a directory or nothing matches
    """
    if not base.is_dir():
        raise ConfigError(f"Base directory not found: {base}")

    files = match_files(base, patterns, dotfiles)
    if not files:
        raise ConfigError("The pattern in the 'src' property didn't match any files.")
    return files
