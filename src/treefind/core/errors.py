"""Exception types for treefind."""


class TreefindError(Exception):
    """Base exception for treefind errors."""

    pass


class ConfigError(TreefindError):
    """A name pattern could not be compiled into a regular expression.

    Raised while building the search configuration, before any directory
    is visited. The message names the offending pattern text.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f'Invalid --name "{pattern}"')


class EntryResolutionError(TreefindError):
    """A single entry could not be resolved during the walk.

    The walker yields these as values instead of raising them, so one
    unreadable directory never stops the rest of the traversal.
    """

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(str(cause))


class MetadataFetchError(TreefindError):
    """Metadata for an already resolved entry could not be read.

    Fatal for the whole run.
    """

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read metadata for {path}: {cause}")
