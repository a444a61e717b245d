"""Inspect and reset a clone directory that may be a reused build cache."""

import logging
from dataclasses import dataclass

from gitclone.git.executor import GitExecutor, GitCommandError
from gitclone.lib.constants import ORIGIN
from gitclone.lib.credentials import mask_url, same_repository
from gitclone.lib.errors import RemoteSetupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OriginState:
    present: bool
    url: str | None = None


def inspect_origin(executor: GitExecutor, expected_url: str) -> OriginState:
    """
    Report whether the clone directory already has an "origin" remote.

    Read-only. A directory that is not a repository has no origin.

    Raises:
        RemoteSetupError: origin exists but points at a different repository
    """
    if not executor.is_repository():
        return OriginState(present=False)

    url = executor.remote_get_url(ORIGIN)
    if url is None:
        return OriginState(present=False)

    if not same_repository(url, expected_url):
        raise RemoteSetupError(
            f"{executor.repo_dir} is a git repository whose origin is {mask_url(url)}, "
            f"not {mask_url(expected_url)}"
        )

    logger.info(f"Reusing existing clone at {executor.repo_dir}")
    return OriginState(present=True, url=url)


def reset_repository(executor: GitExecutor) -> None:
    """
    Discard local changes and untracked files, including inside submodules.

    Raises:
        RemoteSetupError: if any reset command fails
    """
    try:
        executor.reset_hard("HEAD")
        executor.clean()
        executor.submodule_foreach("git reset --hard HEAD")
        executor.submodule_foreach("git clean -x -d -f")
    except GitCommandError as e:
        raise RemoteSetupError(f"reset repository: {e}") from e
