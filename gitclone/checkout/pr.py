"""
Pull request checkout.

Two ways to get a PR's merged tree:

- auto merge: the hosting provider already computed the merge commit and
  publishes it under a merge ref (e.g. pull/42/merge); fetch and check it out.
- manual merge: fetch the destination branch and the PR's source branch and
  merge them locally.

Either way the result is left on a detached HEAD so both strategies hand
later steps the same shape of tree.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from gitclone.git.executor import GitExecutor, GitCommandError
from gitclone.lib.config import CheckoutRequest
from gitclone.lib.constants import ORIGIN, FORK_REMOTE
from gitclone.lib.credentials import same_repository, strip_credentials
from gitclone.lib.errors import (
    CheckoutError,
    FetchError,
    MergeConflictError,
    MergeRefUnresolvableError,
    RemoteSetupError,
)

logger = logging.getLogger(__name__)

FETCH_HEAD = "FETCH_HEAD"

# https://host/owner/repo(.git), ssh://git@host[:port]/owner/repo, git@host:owner/repo
REPO_URL_RE = re.compile(
    r"^(?:[a-z][a-z0-9+.-]*://)?(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?[/:](?P<path>.+?)(?:\.git)?/*$",
    re.IGNORECASE,
)


class MergeStrategy(str, Enum):
    AUTO = "auto"
    MANUAL = "manual"


@dataclass(frozen=True)
class MergeOutcome:
    strategy: MergeStrategy
    head: str
    detached: bool = True


def repository_owner(url: str) -> str | None:
    """Owner/org segment of a repository url, lowercased. None if unparseable."""
    match = REPO_URL_RE.match(strip_credentials(url.strip()))
    if not match:
        return None
    segments = [s for s in match.group("path").split("/") if s]
    if len(segments) < 2:
        return None
    return segments[-2].lower()


def is_fork(repository_url: str, pr_repository_url: str) -> bool:
    """A PR comes from a fork when its source repo's owner differs from the target's."""
    if not pr_repository_url:
        return False
    if same_repository(repository_url, pr_repository_url):
        return False
    source_owner = repository_owner(pr_repository_url)
    target_owner = repository_owner(repository_url)
    if source_owner is None or target_owner is None:
        return True
    return source_owner != target_owner


def is_ssh_url(url: str) -> bool:
    return url.startswith("ssh://") or bool(re.match(r"^[^@/:]+@[^/:]+:", url))


def is_private(request: CheckoutRequest) -> bool:
    """Use the configured visibility; without it, an SSH source url is taken as private."""
    if request.pr_repository_private is not None:
        return request.pr_repository_private
    return is_ssh_url(request.pr_repository_url)


def select_strategy(request: CheckoutRequest) -> MergeStrategy:
    """
    Auto merge unless manual merge was asked for.

    A manual merge request is still escalated to auto merge when the source
    is a private fork: its commits can't be fetched without credentials for
    the fork, which this step doesn't have.
    """
    if not request.manual_merge:
        return MergeStrategy.AUTO
    if is_private(request) and is_fork(request.repository_url, request.pr_repository_url):
        return MergeStrategy.AUTO
    return MergeStrategy.MANUAL


def merge_ref_for(request: CheckoutRequest) -> str:
    if request.pr_merge_branch:
        return request.pr_merge_branch
    if request.pr_id:
        return f"pull/{request.pr_id}/merge"
    raise MergeRefUnresolvableError("no pull request merge branch or pull request ID given")


def source_ref_for(request: CheckoutRequest) -> str:
    if request.branch:
        return request.branch
    if request.pr_merge_branch:
        return request.pr_merge_branch
    if request.pr_id:
        return f"pull/{request.pr_id}/head"
    raise MergeRefUnresolvableError("no pull request source branch, merge branch or ID given")


def auto_merge(executor: GitExecutor, request: CheckoutRequest) -> None:
    """Fetch the provider's merge ref and check it out detached."""
    merge_ref = merge_ref_for(request)
    try:
        executor.fetch(ORIGIN, merge_ref, depth=request.clone_depth)
        executor.checkout(FETCH_HEAD, detach=True)
    except GitCommandError as e:
        raise MergeRefUnresolvableError(
            f"{merge_ref} could not be resolved; the pull request may be closed or have conflicts: {e}"
        ) from e


def _source_remote(executor: GitExecutor, request: CheckoutRequest) -> str:
    if not request.pr_repository_url or same_repository(request.repository_url, request.pr_repository_url):
        return ORIGIN

    current = executor.remote_get_url(FORK_REMOTE)
    try:
        if current is None:
            executor.remote_add(FORK_REMOTE, request.pr_repository_url)
        elif not same_repository(current, request.pr_repository_url):
            # Left over from an earlier build of another fork's PR
            logger.info(f"Pointing remote {FORK_REMOTE} at {strip_credentials(request.pr_repository_url)}")
            executor.config_set(f"remote.{FORK_REMOTE}.url", request.pr_repository_url)
    except GitCommandError as e:
        raise RemoteSetupError(f"set up remote {FORK_REMOTE}: {e}") from e
    return FORK_REMOTE


def manual_merge(executor: GitExecutor, request: CheckoutRequest) -> None:
    """
    Fetch destination and source, then merge the source into the destination locally.

    The merge happens on a detached HEAD at origin/<branch_dest>, so no
    local branch is moved.
    """
    source_ref = source_ref_for(request)
    remote = _source_remote(executor, request)
    depth = request.clone_depth

    try:
        executor.fetch(ORIGIN, request.branch_dest, depth=depth)
    except GitCommandError as e:
        raise FetchError(f"fetch {request.branch_dest}: {e}") from e
    try:
        executor.fetch(remote, source_ref, depth=depth)
    except GitCommandError as e:
        raise FetchError(f"fetch {source_ref} from {remote}: {e}") from e

    # Local branches must not move: the directory may be reused by later builds
    destination = f"{ORIGIN}/{request.branch_dest}"
    try:
        executor.checkout(destination, detach=True)
    except GitCommandError as e:
        raise CheckoutError(f"checkout {destination}: {e}") from e

    # FETCH_HEAD still points at the source ref fetched last
    merge_ref = request.commit or FETCH_HEAD
    try:
        executor.merge(merge_ref)
    except GitCommandError as e:
        raise MergeConflictError(
            f"merge {source_ref} into {request.branch_dest}: {e}",
            conflicted=executor.conflicted_files(),
        ) from e


def checkout_pull_request(executor: GitExecutor, request: CheckoutRequest) -> MergeOutcome:
    """
    Check out the merged result of a pull request, on a detached HEAD.

    Raises:
        MergeRefUnresolvableError: auto merge ref missing or unfetchable
        MergeConflictError: manual merge hit conflicts
        FetchError, CheckoutError, RemoteSetupError: manual merge setup failed
    """
    strategy = select_strategy(request)
    logger.info(f"Pull request build, using {strategy.value} merge")

    if strategy is MergeStrategy.AUTO:
        auto_merge(executor, request)
    else:
        manual_merge(executor, request)
        # auto merge is already detached at FETCH_HEAD
        detach_head(executor)

    try:
        head = executor.log("%H")
    except GitCommandError as e:
        raise CheckoutError(f"read merged HEAD: {e}") from e
    return MergeOutcome(strategy=strategy, head=head, detached=True)


def detach_head(executor: GitExecutor) -> None:
    """Move HEAD off any local branch so later steps can't mutate one by accident."""
    try:
        executor.checkout(detach=True)
    except GitCommandError as e:
        raise CheckoutError(f"detach HEAD: {e}") from e
