"""Process runner for git commands."""

import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ProcessError(Exception):
    """A spawned process exited with a nonzero status."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class ProcessTimeout(ProcessError):
    """A spawned process was killed after exceeding its timeout."""

    def __init__(self, timeout: float, message: str):
        self.timeout = timeout
        super().__init__(-1, message)


async def run_process(
    exe: str,
    args: list,
    cwd: Path,
    timeout: float | None = None,
) -> str:
    """
    Run an executable and return its combined output.

    Args:
        exe: Executable name (looked up on PATH) or path
        args: Arguments, each passed as a single token (no shell)
        cwd: Working directory for the process
        timeout: Seconds to wait before killing the process (None waits forever)

    Returns:
        Captured stdout and stderr, interleaved in arrival order

    Raises:
        ProcessError: if the process exits nonzero
        ProcessTimeout: if the timeout expires
    """
    argv = [str(a) for a in args]
    logger.debug(f"Running {exe} {' '.join(argv)} in {cwd}")

    proc = await asyncio.create_subprocess_exec(
        exe, *argv,
        cwd=str(cwd),
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    try:
        raw, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise ProcessTimeout(timeout, f"Command timed out after {timeout}s: {exe} {' '.join(argv[:1])}")

    output = raw.decode("utf-8", errors="replace")
    if proc.returncode:
        raise ProcessError(proc.returncode, output or f"Process failed => {proc.returncode}")
    return output
