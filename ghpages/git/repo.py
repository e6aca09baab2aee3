"""Repository handle bound to one working directory."""

import logging
from pathlib import Path

from ghpages.git.runner import run_process, ProcessError
from ghpages.git.probe import RefProbe, probe_remote_ref, has_staged_changes
from ghpages.lib.errors import RemoteUrlError

logger = logging.getLogger(__name__)


def _as_list(files: str | list[str]) -> list[str]:
    if isinstance(files, str):
        return [files]
    return list(files)


class Git:
    """
    Run git subcommands in one working directory.

    Operations are coroutines that return the handle so calls can be chained
    one after another:

        git = await Git(path).init()
        await (await git.add(".")).commit("Initial")

    Operations must not run concurrently on the same handle; git holds an
    index lock for the duration of mutating commands.
    """

    def __init__(self, cwd: Path | str, cmd: str | None = None, timeout: float | None = None):
        self.cwd = Path(cwd)
        self.cmd = cmd or "git"
        self.timeout = timeout
        self.output = ""  # Output of the most recent command, for diagnostics

    def __repr__(self) -> str:
        return f"Git({str(self.cwd)!r}, cmd={self.cmd!r})"

    async def exec(self, *args) -> str:
        """Run `git <args>` in the working directory and return its output."""
        self.output = await run_process(self.cmd, list(args), self.cwd, self.timeout)
        return self.output

    async def init(self) -> "Git":
        await self.exec("init")
        return self

    async def clean(self) -> "Git":
        """Remove untracked files and directories."""
        await self.exec("clean", "-f", "-d")
        return self

    async def reset(self, remote: str, branch: str) -> "Git":
        """Hard reset to <remote>/<branch>, discarding local changes."""
        await self.exec("reset", "--hard", f"{remote}/{branch}")
        return self

    async def fetch(self, remote: str) -> "Git":
        await self.exec("fetch", remote)
        return self

    async def checkout(self, remote: str, branch: str) -> "Git":
        """
        Check out a branch, creating an orphan if the remote does not have it.

        When <remote>/<branch> exists the working tree is cleaned and hard
        reset to the remote tip. When it is missing (ls-remote exit 2) a new
        orphan branch with an empty history is created instead. Any other
        probe failure propagates.
        """
        probe = await probe_remote_ref(self.cmd, self.cwd, remote, branch, self.timeout)
        if probe is RefProbe.FOUND:
            await self.exec("checkout", branch)
            await self.clean()
            await self.reset(remote, branch)
        elif probe is RefProbe.NOT_FOUND:
            logger.info(f"Branch {branch} not found on {remote}, creating orphan branch")
            await self.exec("checkout", "--orphan", branch)
        else:
            raise AssertionError(f"Unhandled probe result: {probe}")
        return self

    async def rm(self, files: str | list[str]) -> "Git":
        """Remove paths from the index and working tree. Unmatched paths are ignored."""
        await self.exec("rm", "--ignore-unmatch", "-r", "-f", *_as_list(files))
        return self

    async def add(self, files: str | list[str]) -> "Git":
        await self.exec("add", *_as_list(files))
        return self

    async def commit(self, message: str) -> "Git":
        """Commit staged changes. Does nothing when the index matches HEAD."""
        if not await has_staged_changes(self.cmd, self.cwd, self.timeout):
            logger.info("No changes to commit")
            return self
        await self.exec("commit", "-m", message)
        return self

    async def tag(self, name: str) -> "Git":
        await self.exec("tag", name)
        return self

    async def push(self, remote: str, branch: str, force: bool = False) -> "Git":
        """Push a branch and all tags."""
        args = ["push", "--tags", remote, branch]
        if force:
            args.append("--force")
        await self.exec(*args)
        return self

    async def pull(self, remote: str, branch: str, force: bool = False) -> "Git":
        """Pull a branch and all tags."""
        args = ["pull", "--tags", remote, branch]
        if force:
            args.append("--force")
        await self.exec(*args)
        return self

    async def set_user(self, name: str, email: str) -> "Git":
        """Set the commit identity for this repository."""
        await self.exec("config", "user.email", email)
        await self.exec("config", "user.name", name)
        return self

    async def get_remote_url(self, remote: str) -> str:
        """
        Get the configured URL of a remote.

        Raises:
            RemoteUrlError: if the remote has no URL configured
        """
        try:
            output = await self.exec("config", "--get", f"remote.{remote}.url")
        except ProcessError:
            raise RemoteUrlError(remote) from None

        url = output.splitlines()[0].strip() if output else ""
        if not url:
            raise RemoteUrlError(remote)
        return url

    async def delete_ref(self, branch: str) -> "Git":
        """Delete the local branch ref without touching the working tree."""
        await self.exec("update-ref", "-d", f"refs/heads/{branch}")
        return self
