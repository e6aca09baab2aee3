#!/usr/bin/env python3
"""gh-pages CLI entrypoint."""

import sys
import argparse
import logging

from ghpages import __version__
from ghpages.commands import publish as cmd_publish_module
from ghpages.commands import clean as cmd_clean_module


def configure_logging(verbose: bool = False, silent: bool = False) -> None:
    """Send progress messages to stderr; --silent keeps only warnings."""
    if silent:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def cmd_publish(args):
    configure_logging(args.verbose, args.silent)
    return cmd_publish_module.cmd_publish(args)


def cmd_clean(args):
    configure_logging(args.verbose)
    return cmd_clean_module.cmd_clean(args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='gh-pages', description='Publish files to a git branch')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show every git command')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # gh-pages publish
    p_publish = subparsers.add_parser('publish', help='Publish a directory')
    p_publish.add_argument('dir', help='Base directory holding the files to publish')
    p_publish.add_argument('--config', '-c', help='YAML options file (default: ./ghpages.yaml if present)')
    p_publish.add_argument('--src', '-s', action='append', help='Glob pattern of files to publish (repeatable, default: **/*)')
    p_publish.add_argument('--dest', '-e', help='Destination directory inside the branch (default: .)')
    p_publish.add_argument('--branch', '-b', help='Target branch (default: gh-pages)')
    p_publish.add_argument('--remote', '-o', help='Remote alias (default: origin)')
    p_publish.add_argument('--repo', '-r', help='Repository URL (default: remote URL of the base directory)')
    p_publish.add_argument('--message', '-m', help='Commit message (default: Updates)')
    p_publish.add_argument('--tag', '-t', help='Tag to create')
    p_publish.add_argument('--user', '-u', help='Commit identity as "Name <email>"')
    p_publish.add_argument('--remove', help='Pattern of existing files to remove (default: .)')
    p_publish.add_argument('--git', help='git executable (default: git)')
    p_publish.add_argument('--depth', type=int, help='Shallow clone depth (default: 1)')
    p_publish.add_argument('--timeout', type=float, help='Seconds to wait for each git command')
    p_publish.add_argument('--cache-dir', help='Directory for cached working copies')
    p_publish.add_argument('--add', '-a', action='store_true', help='Only add files, never remove existing ones')
    p_publish.add_argument('--dotfiles', '-d', action='store_true', help='Include files starting with "."')
    p_publish.add_argument('--silent', action='store_true', help='Hide error detail (e.g. credentials in URLs)')
    p_publish.add_argument('--no-push', '-n', action='store_true', help='Commit without pushing')
    p_publish.add_argument('--no-history', '-f', action='store_true', help='Replace branch history with a single commit (force push)')
    p_publish.set_defaults(func=cmd_publish)

    # gh-pages clean
    p_clean = subparsers.add_parser('clean', help='Remove cached working copies')
    p_clean.add_argument('--cache-dir', help='Directory for cached working copies')
    p_clean.set_defaults(func=cmd_clean)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
