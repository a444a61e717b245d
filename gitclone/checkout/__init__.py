"""Checkout decision logic: what to fetch, check out and merge."""

from gitclone.checkout.refs import CheckoutMode, CheckoutTarget, resolve_target
from gitclone.checkout.origin import OriginState, inspect_origin, reset_repository
from gitclone.checkout.shallow import checkout_target
from gitclone.checkout.pr import (
    MergeOutcome,
    MergeStrategy,
    checkout_pull_request,
    is_fork,
    select_strategy,
)
from gitclone.checkout.submodules import update_submodules
from gitclone.checkout.metadata import export_metadata

__all__ = [
    "CheckoutMode",
    "CheckoutTarget",
    "resolve_target",
    "OriginState",
    "inspect_origin",
    "reset_repository",
    "checkout_target",
    "MergeOutcome",
    "MergeStrategy",
    "checkout_pull_request",
    "is_fork",
    "select_strategy",
    "update_submodules",
    "export_metadata",
]
