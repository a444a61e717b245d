"""Ref resolution: pick the single thing to check out."""

from dataclasses import dataclass
from enum import Enum


class CheckoutMode(str, Enum):
    COMMIT = "commit"
    TAG = "tag"
    BRANCH = "branch"
    NONE = "none"


@dataclass(frozen=True)
class CheckoutTarget:
    mode: CheckoutMode
    ref: str = ""

    @property
    def resolved(self) -> bool:
        return self.mode is not CheckoutMode.NONE


def resolve_target(commit: str, tag: str, branch: str) -> CheckoutTarget:
    """
    Resolve (commit, tag, branch) into one checkout target.

    Precedence is commit, then tag, then branch. A tag or branch given next
    to a commit is context only (the branch is still used to fetch), not a
    conflict. Nothing set means no checkout: the clone stays at whatever the
    remote's default HEAD resolves to.
    """
    if commit:
        return CheckoutTarget(CheckoutMode.COMMIT, commit)
    if tag:
        return CheckoutTarget(CheckoutMode.TAG, tag)
    if branch:
        return CheckoutTarget(CheckoutMode.BRANCH, branch)
    return CheckoutTarget(CheckoutMode.NONE)
