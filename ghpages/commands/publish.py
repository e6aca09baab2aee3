"""
gh-pages publish - Publish a directory to a branch of a git repository.

The working copy is cached per repository URL and reused across runs. Each
run resets it to the remote branch tip (or starts an orphan branch), swaps
in the new files and commits only when something changed, so a failed run
can simply be repeated.
"""

import asyncio
import inspect
import logging
import sys
from pathlib import Path

from ghpages.git import Git, ProcessError, clone
from ghpages.lib.cache import get_clone_dir
from ghpages.lib.config import PublishOptions, DEFAULT_CONFIG_FILE, load_options, make_options
from ghpages.lib.constants import EXIT_SUCCESS, EXIT_ERROR, EXIT_CONFIG
from ghpages.lib.errors import ConfigError, PublishError, SILENT_MESSAGE
from ghpages.lib.files import require_files, match_removals, copy_files

logger = logging.getLogger(__name__)


async def get_repo_url(base: Path, options: PublishOptions) -> str:
    """
    Use the repo option, or the remote URL of the repository at base.

    A repo option naming a local directory is made absolute, matching the
    URL git records for a local clone.
    """
    if options.repo:
        if Path(options.repo).is_dir():
            return str(Path(options.repo).resolve())
        return options.repo
    return await Git(base, options.git, options.timeout).get_remote_url(options.remote)


async def _check_remote(git: Git, options: PublishOptions, repo: str) -> None:
    """Fail if a reused working copy points at a different repository."""
    url = await git.get_remote_url(options.remote)
    if url != repo:
        raise PublishError(
            f'Remote url mismatch. Got "{url}" but expected "{repo}" in {git.cwd}. '
            f"Try running `gh-pages clean` first."
        )


async def _run_hook(git: Git, options: PublishOptions) -> None:
    result = options.before_add(git)
    if inspect.isawaitable(result):
        await result


async def _publish(base: Path, files: list[str], options: PublishOptions) -> Git:
    repo = await get_repo_url(base, options)
    clone_dir = get_clone_dir(repo, options.cache_dir)

    if options.silent:
        # The cache path embeds the URL, which may carry credentials
        logger.info("Cloning repository")
    else:
        logger.info(f"Cloning {repo} into {clone_dir}")
    git = await clone(repo, clone_dir, options.branch, options)
    await _check_remote(git, options, repo)

    logger.info("Cleaning")
    await git.clean()

    logger.info(f"Fetching {options.remote}")
    await git.fetch(options.remote)

    logger.info(f"Checking out {options.remote}/{options.branch}")
    await git.checkout(options.remote, options.branch)

    if not options.history:
        await git.delete_ref(options.branch)

    if not options.add:
        removals = match_removals(git.cwd, options.dest, options.remove, options.dotfiles)
        if removals:
            logger.info("Removing files")
            await git.rm(removals)

    logger.info("Copying files")
    copy_files(files, base, git.cwd / options.dest)

    if options.before_add:
        await _run_hook(git, options)

    logger.info("Adding all")
    await git.add(".")

    if options.user:
        await git.set_user(options.user["name"], options.user["email"])

    logger.info("Committing")
    await git.commit(options.message)

    if options.tag:
        logger.info(f"Tagging {options.tag}")
        try:
            await git.tag(options.tag)
        except ProcessError as e:
            # Tag may already exist from an earlier run
            logger.warning(f"Tagging failed, continuing: {e}")

    if options.push:
        logger.info(f"Pushing {options.branch} to {options.remote}")
        await git.push(options.remote, options.branch, not options.history)

    return git


async def publish(base_path: Path | str, options: PublishOptions | None = None) -> Git:
    """
    Publish the files under base_path.

    Args:
        base_path: Directory holding the files to publish
        options: Publish options (defaults if omitted)

    Returns:
        The Git handle for the cached working copy

    Raises:
        ConfigError: bad options, nothing to publish, no remote URL
        ProcessError: a git command failed (replaced by PublishError in silent mode)
        PublishError: the run failed; in silent mode the detail is withheld
    """
    options = options or make_options()
    base = Path(base_path).resolve()
    files = require_files(base, options.src, options.dotfiles)

    try:
        return await _publish(base, files, options)
    except (ProcessError, PublishError):
        if options.silent:
            raise PublishError(SILENT_MESSAGE) from None
        raise


def _options_from_args(args) -> PublishOptions:
    """Merge the config file (if any) with command line flags."""
    config_path = Path(args.config) if args.config else None
    if config_path is None and Path(DEFAULT_CONFIG_FILE).exists():
        config_path = Path(DEFAULT_CONFIG_FILE)

    values = load_options(config_path) if config_path else {}
    flags = {
        "dest": args.dest,
        "git": args.git,
        "depth": args.depth,
        "branch": args.branch,
        "remote": args.remote,
        "src": args.src,
        "remove": args.remove,
        "message": args.message,
        "repo": args.repo,
        "tag": args.tag,
        "cache_dir": args.cache_dir,
        "timeout": args.timeout,
    }
    values.update({k: v for k, v in flags.items() if v is not None})

    # Switches only override the file when given
    for name in ("add", "dotfiles", "silent"):
        if getattr(args, name):
            values[name] = True
    if args.no_push:
        values["push"] = False
    if args.no_history:
        values["history"] = False

    if args.user:
        values["user"] = parse_user(args.user)

    return make_options(**values)


def parse_user(text: str) -> dict:
    """
    Parse "Full Name <email@example.com>" into a user option.

    Raises:
        ConfigError: if the text has no <email> part
    """
    name, sep, rest = text.partition("<")
    email = rest.rstrip().rstrip(">").strip()
    if not sep or not name.strip() or not email:
        raise ConfigError(f'Could not parse name and email from user option "{text}" (expected "Name <email>")')
    return {"name": name.strip(), "email": email}


def cmd_publish(args) -> int:
    """Run a publish from parsed CLI arguments."""
    try:
        options = _options_from_args(args)
        asyncio.run(publish(args.dir, options))
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG
    except (ProcessError, PublishError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        # git executable missing, unreadable source or unwritable cache
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR

    print("Published")
    return EXIT_SUCCESS
