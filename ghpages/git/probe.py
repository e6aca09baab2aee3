"""Exit-code probes used to make branching decisions.

Both probes run a git command whose nonzero exit status is an expected
answer rather than a failure:

- ls-remote --exit-code exits 2 when no ref matches.
- diff-index --quiet exits 0 when the index matches HEAD.
"""

from enum import Enum
from pathlib import Path

from ghpages.git.runner import run_process, ProcessError, ProcessTimeout

# ls-remote --exit-code status for "no matching ref"
LS_REMOTE_NO_MATCH = 2


class RefProbe(Enum):
    """Outcome of probing for a remote-tracking ref."""
    FOUND = "found"
    NOT_FOUND = "not_found"


async def probe_remote_ref(
    cmd: str,
    cwd: Path,
    remote: str,
    branch: str,
    timeout: float | None = None,
) -> RefProbe:
    """
    Check whether <remote>/<branch> exists in the local repository.

    Raises:
        ProcessError: for any exit status other than 0 or 2
    """
    try:
        await run_process(cmd, ["ls-remote", "--exit-code", ".", f"{remote}/{branch}"], cwd, timeout)
    except ProcessError as e:
        if e.code == LS_REMOTE_NO_MATCH:
            return RefProbe.NOT_FOUND
        raise
    return RefProbe.FOUND


async def has_staged_changes(cmd: str, cwd: Path, timeout: float | None = None) -> bool:
    """
    Check if the index differs from HEAD.

    A missing HEAD (fresh orphan branch) counts as changed.
    """
    try:
        await run_process(cmd, ["diff-index", "--quiet", "HEAD"], cwd, timeout)
    except ProcessTimeout:
        raise
    except ProcessError:
        return True
    return False
