"""
Checkout of a commit, tag or branch with the least history possible.

Fetches at the requested depth first. Some hosts can't resolve an
annotated tag or an arbitrary commit inside a shallow window, so a failed
shallow attempt gets exactly one retry with full history.
"""

import logging

from gitclone.checkout.refs import CheckoutMode, CheckoutTarget
from gitclone.git.executor import GitExecutor, GitCommandError
from gitclone.lib.constants import ORIGIN
from gitclone.lib.errors import CheckoutError, FetchError

logger = logging.getLogger(__name__)


def fetch_ref_for(target: CheckoutTarget, branch: str = "") -> str:
    """What to ask origin for so that target becomes checkout-able."""
    if target.mode is CheckoutMode.TAG:
        return f"refs/tags/{target.ref}:refs/tags/{target.ref}"
    if target.mode is CheckoutMode.COMMIT:
        # The commit is normally on the branch being built
        return branch or target.ref
    return target.ref


class ShallowCheckout:
    """Runs one fetch+checkout and tracks whether the full-history retry is spent."""

    def __init__(self, executor: GitExecutor, target: CheckoutTarget, depth: int, branch: str = ""):
        self.executor = executor
        self.target = target
        self.depth = depth
        self.fetch_ref = fetch_ref_for(target, branch)
        self.fell_back = depth == 0

    def _fall_back(self, reason: Exception) -> None:
        logger.warning(
            f"Shallow fetch of {self.fetch_ref} at depth {self.depth} was not enough ({reason}), "
            "retrying with full history"
        )
        self.fell_back = True
        try:
            self.executor.fetch(ORIGIN, self.fetch_ref, depth=0)
        except GitCommandError as e:
            raise FetchError(f"fetch {self.fetch_ref} with full history: {e}") from e

    def fetch(self) -> None:
        try:
            self.executor.fetch(ORIGIN, self.fetch_ref, depth=self.depth)
        except GitCommandError as e:
            if self.fell_back:
                raise FetchError(f"fetch {self.fetch_ref}: {e}") from e
            self._fall_back(e)

    def checkout(self) -> None:
        try:
            self.executor.checkout(self.target.ref)
        except GitCommandError as e:
            if self.fell_back:
                raise CheckoutError(f"checkout {self.target.ref}: {e}") from e
            self._fall_back(e)
            try:
                self.executor.checkout(self.target.ref)
            except GitCommandError as e2:
                raise CheckoutError(f"checkout {self.target.ref}: {e2}") from e2

    def update_branch(self) -> None:
        """Fast-forward to origin/<branch>; fetch and checkout aren't atomic against the remote."""
        upstream = f"{ORIGIN}/{self.target.ref}"
        try:
            self.executor.merge(upstream, ff_only=True)
        except GitCommandError as e:
            raise CheckoutError(f"fast-forward {self.target.ref} to {upstream}: {e}") from e

    def run(self) -> None:
        self.fetch()
        self.checkout()
        if self.target.mode is CheckoutMode.BRANCH:
            self.update_branch()


def checkout_target(executor: GitExecutor, target: CheckoutTarget, depth: int, branch: str = "") -> bool:
    """
    Bring the working tree to target.

    Args:
        executor: Executor bound to the clone directory
        target: Resolved checkout target
        depth: History depth to fetch, 0 for full history
        branch: Branch given alongside a commit, used to fetch it

    Returns:
        True if a checkout ran, False for CheckoutMode.NONE

    Raises:
        FetchError: fetch failed even with full history
        CheckoutError: ref missing after fetch, or fast-forward failed
    """
    if not target.resolved:
        logger.info("No commit, tag or branch requested; skipping checkout")
        return False

    ShallowCheckout(executor, target, depth, branch).run()
    return True
