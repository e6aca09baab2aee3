"""Clone-or-reuse factory for working copies."""

import logging
from pathlib import Path

from ghpages.git.runner import run_process, ProcessError, ProcessTimeout
from ghpages.git.repo import Git

logger = logging.getLogger(__name__)


async def clone(repo: str, directory: Path | str, branch: str, options) -> Git:
    """
    Get a Git handle for `directory`, cloning `repo` into it if needed.

    An existing directory is reused as-is with no git calls. Otherwise a
    shallow single-branch clone is tried first; if it fails (e.g. the branch
    does not exist yet) exactly one full clone is attempted and its result
    is final. A timed out clone is not retried.

    Clones run in the current directory, so a relative `repo` path is
    resolved the way the caller wrote it.

    Args:
        repo: Repository URL or path
        directory: Target working copy directory
        branch: Branch for the shallow clone
        options: Object with `git`, `remote`, `depth` and `timeout` attributes
    """
    directory = Path(directory)
    timeout = getattr(options, "timeout", None)

    if directory.exists():
        return Git(directory, options.git, timeout)

    target = directory.resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    cwd = Path.cwd()

    try:
        await run_process(
            options.git,
            ["clone", repo, str(target), "--branch", branch, "--single-branch",
             "--origin", options.remote, "--depth", options.depth],
            cwd,
            timeout,
        )
    except ProcessTimeout:
        # The killed clone may have left a partial target behind
        raise
    except ProcessError as e:
        logger.warning(f"Shallow clone failed (exit {e.code}), retrying with a full clone")
        await run_process(
            options.git,
            ["clone", repo, str(target), "--origin", options.remote],
            cwd,
            timeout,
        )

    return Git(directory, options.git, timeout)
