"""Location of cached working copies."""

import os
import re
import shutil
from pathlib import Path

CACHE_ENV_VAR = "GHPAGES_CACHE_DIR"

# Characters that are unsafe in file names on common platforms
_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def get_cache_dir(override: str | None = None) -> Path:
    """
    Get the root directory for cached clones.

    Resolution order: explicit override, $GHPAGES_CACHE_DIR,
    $XDG_CACHE_HOME/gh-pages, ~/.cache/gh-pages.
    """
    if override:
        return Path(override)
    env_dir = os.environ.get(CACHE_ENV_VAR)
    if env_dir:
        return Path(env_dir)
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg) / "gh-pages"
    return Path.home() / ".cache" / "gh-pages"


def repo_dirname(repo: str) -> str:
    """File-system safe directory name for a repository URL."""
    return _UNSAFE_CHARS.sub("!", repo).strip(". ") or "repo"


def get_clone_dir(repo: str, override: str | None = None) -> Path:
    """Get the cached working copy directory for a repository."""
    return get_cache_dir(override) / repo_dirname(repo)


def clean_cache(override: str | None = None) -> bool:
    """
    Remove all cached working copies.

    Returns True if a cache directory existed and was removed.
    """
    cache_dir = get_cache_dir(override)
    if not cache_dir.exists():
        return False
    shutil.rmtree(cache_dir)
    return True
