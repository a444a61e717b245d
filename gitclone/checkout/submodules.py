"""Submodule update after the primary checkout."""

import logging

from gitclone.git.executor import GitExecutor, GitCommandError
from gitclone.lib.errors import SubmoduleUpdateError

logger = logging.getLogger(__name__)


def update_submodules(executor: GitExecutor) -> None:
    """
    Initialize and update all submodules recursively.

    A partially updated submodule tree is not a usable checkout, so any
    failure is fatal.
    """
    try:
        executor.submodule_update()
    except GitCommandError as e:
        raise SubmoduleUpdateError(f"update submodules: {e}") from e
