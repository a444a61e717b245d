"""
Configuration loaders for gitclone.

Step inputs come from the process environment, optionally overlaid by an
env file. They are validated once and frozen into a CheckoutRequest; no
other module reads the environment.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from . import constants as c
from . import envparse
from . import validate
from .credentials import mask_url
from .errors import ConfigInvalidError

logger = logging.getLogger(__name__)

TRUE_VALUES = {"yes", "true"}


@dataclass(frozen=True)
class CheckoutRequest:
    """What the working directory should look like when the step is done."""
    repository_url: str
    clone_dir: Path
    commit: str = ""
    tag: str = ""
    branch: str = ""
    branch_dest: str = ""
    pr_id: int = 0
    pr_repository_url: str = ""
    pr_merge_branch: str = ""
    pr_repository_private: bool | None = None  # None: infer from the url
    reset_repository: bool = False
    clone_depth: int = 0
    manual_merge: bool = True
    update_submodules: bool = False
    ssl_verify: bool = True
    http_user: str = ""
    http_token: str = ""

    @property
    def is_pr(self) -> bool:
        """PR inputs supersede plain commit/tag/branch checkout."""
        return bool(self.pr_repository_url or self.pr_merge_branch or self.pr_id)


@dataclass(frozen=True)
class StepProfile:
    """Runtime settings that don't affect which state is checked out."""
    export_file: Path | None
    git_timeout: int


def _flag(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in TRUE_VALUES


def collect_inputs(environ: Mapping[str, str], env_file: Path | None = None) -> dict[str, str]:
    """
    Gather raw step inputs.

    Empty values count as unset. Values from env_file win over environ.

    Raises:
        ConfigInvalidError: if env_file is missing or malformed
    """
    raw = {key: environ[key] for key in c.ALL_INPUTS if environ.get(key)}

    if env_file is not None:
        try:
            from_file = envparse.load_env(env_file)
        except (FileNotFoundError, ValueError) as e:
            raise ConfigInvalidError(f"{env_file}: {e}") from e
        unknown = sorted(set(from_file) - set(c.ALL_INPUTS))
        if unknown:
            logger.warning(f"Ignoring unknown inputs in {env_file}: {', '.join(unknown)}")
        raw.update({k: v for k, v in from_file.items() if k in c.ALL_INPUTS and v})

    return raw


def load_request(inputs: Mapping[str, str]) -> CheckoutRequest:
    """
    Validate raw inputs and build the CheckoutRequest.

    Raises:
        ConfigInvalidError: on schema violations or inconsistent PR inputs
    """
    validate.validate(dict(inputs), "inputs")

    private = inputs.get(c.INPUT_PR_REPOSITORY_PRIVATE)
    request = CheckoutRequest(
        repository_url=inputs[c.INPUT_REPOSITORY_URL].strip(),
        clone_dir=Path(inputs[c.INPUT_CLONE_DIR]),
        commit=inputs.get(c.INPUT_COMMIT, ""),
        tag=inputs.get(c.INPUT_TAG, ""),
        branch=inputs.get(c.INPUT_BRANCH, ""),
        branch_dest=inputs.get(c.INPUT_BRANCH_DEST, ""),
        pr_id=int(inputs.get(c.INPUT_PR_ID) or 0),
        pr_repository_url=inputs.get(c.INPUT_PR_REPOSITORY_URL, "").strip(),
        pr_merge_branch=inputs.get(c.INPUT_PR_MERGE_BRANCH, ""),
        pr_repository_private=None if private is None else _flag(private, False),
        reset_repository=_flag(inputs.get(c.INPUT_RESET_REPOSITORY), False),
        clone_depth=int(inputs.get(c.INPUT_CLONE_DEPTH) or 0),
        manual_merge=_flag(inputs.get(c.INPUT_MANUAL_MERGE), True),
        update_submodules=_flag(inputs.get(c.INPUT_UPDATE_SUBMODULES), True),
        ssl_verify=_flag(inputs.get(c.INPUT_SSL_VERIFY), True),
        http_user=inputs.get(c.INPUT_HTTP_USER, ""),
        http_token=inputs.get(c.INPUT_HTTP_TOKEN, ""),
    )

    if request.is_pr:
        _check_pr_inputs(request)

    return request


def _check_pr_inputs(request: CheckoutRequest) -> None:
    """Reject PR inputs that can't name both sides of the merge."""
    has_merge_ref = bool(request.pr_merge_branch or request.pr_id)
    if request.manual_merge:
        if not request.branch_dest:
            raise ConfigInvalidError(
                f"{c.INPUT_BRANCH_DEST} is required for pull request builds with {c.INPUT_MANUAL_MERGE}=yes"
            )
        if not (request.branch or has_merge_ref):
            raise ConfigInvalidError(
                f"pull request builds with {c.INPUT_MANUAL_MERGE}=yes need one of "
                f"{c.INPUT_BRANCH}, {c.INPUT_PR_MERGE_BRANCH} or {c.INPUT_PR_ID}"
            )
    elif not has_merge_ref:
        raise ConfigInvalidError(
            f"pull request builds with {c.INPUT_MANUAL_MERGE}=no need "
            f"{c.INPUT_PR_MERGE_BRANCH} or {c.INPUT_PR_ID}"
        )


def load_profile(inputs: Mapping[str, str]) -> StepProfile:
    """Build runtime settings. Assumes load_request already validated inputs."""
    export_file = inputs.get(c.INPUT_EXPORT_FILE)
    return StepProfile(
        export_file=Path(export_file) if export_file else None,
        git_timeout=int(inputs.get(c.INPUT_GIT_TIMEOUT, "300")),
    )


def describe_request(request: CheckoutRequest) -> list[tuple[str, str]]:
    """Human-readable (label, value) pairs for the step summary. Never includes the token."""
    rows = [
        ("Repository URL", mask_url(request.repository_url)),
        ("Clone into dir", str(request.clone_dir)),
        ("Commit", request.commit),
        ("Tag", request.tag),
        ("Branch", request.branch),
        ("Destination branch", request.branch_dest),
        ("Pull request ID", str(request.pr_id) if request.pr_id else ""),
        ("Pull request repository URL", request.pr_repository_url),
        ("Pull request merge branch", request.pr_merge_branch),
        ("Reset repository", "yes" if request.reset_repository else "no"),
        ("Clone depth", str(request.clone_depth) if request.clone_depth else "full history"),
        ("Manual merge", "yes" if request.manual_merge else "no"),
        ("Update submodules", "yes" if request.update_submodules else "no"),
        ("SSL verify", "yes" if request.ssl_verify else "no"),
        ("HTTP user", request.http_user),
        ("HTTP token", "***" if request.http_token else ""),
    ]
    return rows
