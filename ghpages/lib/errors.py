"""Error types for ghpages."""


class ConfigError(Exception):
    """Options or environment cannot satisfy a publish."""
    pass


class RemoteUrlError(ConfigError):
    """No URL is configured for a remote."""

    def __init__(self, remote: str):
        self.remote = remote
        super().__init__(
            f"Failed to get remote.{remote}.url (task must either be run in a git "
            f"repository with a configured {remote} remote or must be configured "
            f"with the \"repo\" option)."
        )


class PublishError(Exception):
    """Publishing failed. Detail may be withheld in silent mode."""
    pass


SILENT_MESSAGE = "Unspecified error (run without silent option for detail)"
