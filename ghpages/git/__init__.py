"""Git operations for ghpages.

Every operation shells out to the git executable. Nothing here reimplements
git; exit codes are interpreted exactly as git documents them.

Return type conventions:
- Git methods return the handle itself so calls chain in sequence.
  Examples: add(), commit(), push()
- Probes return a decision value instead of raising for expected exits.
  Examples: probe_remote_ref() -> RefProbe, has_staged_changes() -> bool
- Unexpected nonzero exits raise ProcessError with the exit code and output.
"""

from ghpages.git.runner import (
    run_process,
    ProcessError,
    ProcessTimeout,
)
from ghpages.git.probe import (
    RefProbe,
    probe_remote_ref,
    has_staged_changes,
)
from ghpages.git.repo import Git
from ghpages.git.clone import clone

__all__ = [
    # runner
    "run_process",
    "ProcessError",
    "ProcessTimeout",
    # probe
    "RefProbe",
    "probe_remote_ref",
    "has_staged_changes",
    # handle
    "Git",
    "clone",
]
