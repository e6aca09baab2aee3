"""
Publish options.

Options come from three places, later ones winning: built-in defaults, an
optional YAML file (ghpages.yaml) and explicit overrides from the CLI or a
caller.
"""

import functools
import json
import re
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Callable, Optional

import jsonschema
import yaml

from ghpages.lib.errors import ConfigError

DEFAULT_CONFIG_FILE = "ghpages.yaml"
OPTIONS_SCHEMA = Path(__file__).parent.parent / "schemas" / "options.schema.json"

# Command line spelling of each option, for error messages
OPTION_FLAGS = {
    "dest": "--dest",
    "add": "--add",
    "git": "--git",
    "depth": "--depth",
    "dotfiles": "--dotfiles",
    "branch": "--branch",
    "remote": "--remote",
    "src": "--src",
    "remove": "--remove",
    "push": "--no-push",
    "history": "--no-history",
    "message": "--message",
    "silent": "--silent",
    "repo": "--repo",
    "tag": "--tag",
    "user": "--user",
    "cache_dir": "--cache-dir",
    "timeout": "--timeout",
}


class InvalidOptionsError(ConfigError):
    """One or more option values were rejected by the options schema."""

    def __init__(self, source: str, problems: list[tuple[str, str]]):
        self.source = source
        self.problems = problems
        lines = [f"Invalid options in {source}:"]
        for name, message in problems:
            flag = OPTION_FLAGS.get(name)
            lines.append(f"  {name} ({flag}): {message}" if flag else f"  {name}: {message}")
        super().__init__("\n".join(lines))

    @property
    def options(self) -> list[str]:
        """Names of the rejected options, in report order."""
        return [name for name, _ in self.problems]


@functools.cache
def _options_validator() -> jsonschema.Draft7Validator:
    schema = json.loads(OPTIONS_SCHEMA.read_text())
    return jsonschema.Draft7Validator(schema)


def _validate_options(data: dict, source: str) -> None:
    """
    Check option values against the options schema.

    Every bad option is reported at once, keyed by option name.

    Raises:
        InvalidOptionsError: if any value is rejected
    """
    errors = sorted(_options_validator().iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        problems = [(str(e.absolute_path[0]) if e.absolute_path else "options", e.message) for e in errors]
        raise InvalidOptionsError(source, problems)


@dataclass
class PublishOptions:
    """Options for a single publish run."""
    dest: str = "."  # Destination directory inside the working copy
    add: bool = False  # Only add files, never remove existing ones
    git: str = "git"
    depth: int = 1  # Shallow clone depth
    dotfiles: bool = False  # Include names starting with "."
    branch: str = "gh-pages"
    remote: str = "origin"
    src: list[str] = field(default_factory=lambda: ["**/*"])
    remove: str = "."  # Pattern of existing files to remove, relative to dest
    push: bool = True
    history: bool = True  # False deletes the local ref and force-pushes
    message: str = "Updates"
    silent: bool = False  # Withhold error detail that may contain credentials
    repo: Optional[str] = None  # Defaults to the base directory's remote URL
    tag: Optional[str] = None
    user: Optional[dict] = None  # {"name": ..., "email": ...}
    before_add: Optional[Callable[..., Any]] = None  # Receives the live Git handle
    cache_dir: Optional[str] = None
    timeout: Optional[float] = None  # Seconds per git invocation

    def to_dict(self) -> dict:
        """Serializable options, without the before_add hook."""
        data = asdict(self)
        data.pop("before_add")
        return data


OPTION_NAMES = {f.name for f in fields(PublishOptions)}


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def normalize_keys(data: dict) -> dict:
    """Accept camelCase keys (cacheDir) as well as snake_case (cache_dir)."""
    return {_snake_case(k): v for k, v in data.items()}


def _check_unknown(data: dict, source: str) -> None:
    unknown = set(data) - OPTION_NAMES
    if unknown:
        raise ConfigError(f"Unknown option(s) in {source}: {', '.join(sorted(unknown))}")


def load_options(config_path: Path) -> dict:
    """
    Load a YAML options file.

    Returns:
        Validated option values keyed by snake_case name

    Raises:
        ConfigError: if the file is missing, unparseable or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}") from None

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: expected a mapping of options")

    data = normalize_keys(data)
    if "before_add" in data:
        raise ConfigError(f"{config_path}: before_add can only be set from Python")

    _check_unknown(data, str(config_path))
    _validate_options(data, str(config_path))
    return data


def make_options(**overrides) -> PublishOptions:
    """
    Build PublishOptions from defaults plus overrides.

    Overrides set to None keep the default.

    Raises:
        ConfigError: for unknown options or invalid values
    """
    overrides = normalize_keys(overrides)
    _check_unknown(overrides, "publish options")

    values = {k: v for k, v in overrides.items() if v is not None}
    if isinstance(values.get("src"), str):
        values["src"] = [values["src"]]

    hook = values.get("before_add")
    if hook is not None and not callable(hook):
        raise ConfigError("before_add must be callable")

    options = PublishOptions(**values)
    _validate_options(options.to_dict(), "publish options")
    return options
