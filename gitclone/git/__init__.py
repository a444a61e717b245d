"""Git operations for gitclone.

GitExecutor is the only way the checkout logic touches a repository.
run_git is the low-level runner it is built on.
"""

from gitclone.git.runner import (
    run_git,
    GitResult,
    DEFAULT_TIMEOUT,
)
from gitclone.git.executor import (
    GitExecutor,
    GitCommandError,
)

__all__ = [
    "run_git",
    "GitResult",
    "DEFAULT_TIMEOUT",
    "GitExecutor",
    "GitCommandError",
]
