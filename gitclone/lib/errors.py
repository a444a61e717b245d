"""
Error kinds for gitclone.

Every failure the clone step can hit maps to one CloneError subclass.
The orchestrator wraps them in StageError so the CLI can name the stage
that failed.
"""


class CloneError(Exception):
    """Base class for all clone step failures."""


class ConfigInvalidError(CloneError):
    """Bad or missing step input. Raised before any git command runs."""


class RemoteSetupError(CloneError):
    """init, remote add or config set failed, or origin points elsewhere."""


class FetchError(CloneError):
    """Fetch failed, including the full-history retry."""


class CheckoutError(CloneError):
    """Ref could not be checked out after fetching it."""


class MergeConflictError(CloneError):
    """Manual PR merge stopped on conflicts."""

    def __init__(self, message: str, conflicted: list[str] | None = None):
        self.conflicted = conflicted or []
        if self.conflicted:
            message = f"{message} (conflicts: {', '.join(self.conflicted)})"
        super().__init__(message)


class MergeRefUnresolvableError(CloneError):
    """PR merge ref missing or could not be fetched/checked out."""


class SubmoduleUpdateError(CloneError):
    """Recursive submodule update failed."""


class MetadataExportError(CloneError):
    """Reading or exporting commit metadata failed."""


class StageError(Exception):
    """A CloneError annotated with the orchestration stage it happened in."""

    def __init__(self, stage: str, cause: CloneError):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} failed: {cause}")
