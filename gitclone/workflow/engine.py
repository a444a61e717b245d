"""
Clone orchestration.

Sequence: inspect origin -> reset if requested -> init/add remote ->
credentials and SSL settings -> resolve ref -> ref checkout or PR merge ->
submodules -> export metadata.

Every CloneError raised by a stage is re-raised as StageError naming the
stage, after moving the FSM to "failed".
"""

import logging
from dataclasses import dataclass

from gitclone.checkout.metadata import export_metadata
from gitclone.checkout.origin import OriginState, inspect_origin, reset_repository
from gitclone.checkout.pr import MergeOutcome, checkout_pull_request
from gitclone.checkout.refs import CheckoutTarget, resolve_target
from gitclone.checkout.shallow import checkout_target
from gitclone.checkout.submodules import update_submodules
from gitclone.git.executor import GitExecutor, GitCommandError
from gitclone.lib.config import CheckoutRequest
from gitclone.lib.constants import ORIGIN
from gitclone.lib.credentials import mask_url, with_credentials
from gitclone.lib.errors import CloneError, RemoteSetupError, StageError
from gitclone.lib.export import ExportSink
from gitclone.workflow.fsm import CloneFSM

logger = logging.getLogger(__name__)


@dataclass
class CloneResult:
    """What a finished run did."""
    origin: OriginState
    target: CheckoutTarget
    merge: MergeOutcome | None = None
    exported: int = 0
    stage: str = "done"


def prepare_remote(executor: GitExecutor, request: CheckoutRequest, origin: OriginState) -> None:
    """
    Init the repository, add origin and apply credential/TLS settings.

    Raises:
        RemoteSetupError: if any setup command fails
    """
    try:
        executor.init()
        if not origin.present:
            executor.remote_add(ORIGIN, request.repository_url)

        authed_url = with_credentials(request.repository_url, request.http_user, request.http_token)
        if authed_url != request.repository_url:
            logger.info(f"Using credentials for {mask_url(authed_url)}")
            executor.config_set(f"remote.{ORIGIN}.url", authed_url)

        if not request.ssl_verify:
            logger.warning("SSL verification disabled for this repository")
            executor.config_set("http.sslVerify", "false")
    except GitCommandError as e:
        raise RemoteSetupError(f"repository setup: {e}") from e


class CloneRun:
    """One run of the clone step against one directory."""

    def __init__(self, request: CheckoutRequest, executor: GitExecutor, sink: ExportSink):
        self.request = request
        self.executor = executor
        self.sink = sink
        self.fsm = CloneFSM()

    def execute(self) -> CloneResult:
        try:
            return self._execute()
        except CloneError as e:
            stage = self.fsm.state
            if not self.fsm.finished:
                self.fsm.fail()
            logger.debug(f"Clone failed during {stage}: {e}")
            raise StageError(stage, e) from e

    def _execute(self) -> CloneResult:
        request = self.request

        self.fsm.inspect()
        origin = inspect_origin(self.executor, request.repository_url)

        if request.reset_repository:
            if origin.present:
                self.fsm.reset()
                reset_repository(self.executor)
            else:
                logger.info("Nothing to reset: no existing clone")

        self.fsm.prepare()
        prepare_remote(self.executor, request, origin)

        target = resolve_target(request.commit, request.tag, request.branch)
        result = CloneResult(origin=origin, target=target)

        if request.is_pr:
            self.fsm.merge()
            result.merge = checkout_pull_request(self.executor, request)
            resolved = True
        else:
            if target.resolved:
                self.fsm.checkout()
            resolved = checkout_target(self.executor, target, request.clone_depth, request.branch)

        if not resolved:
            logger.info("No checkout happened; skipping submodules and metadata export")
            self.fsm.finish()
            result.stage = self.fsm.state
            return result

        if request.update_submodules:
            self.fsm.update_submodules()
            update_submodules(self.executor)

        self.fsm.export()
        result.exported = export_metadata(self.executor, self.sink)

        self.fsm.finish()
        result.stage = self.fsm.state
        return result


def execute(request: CheckoutRequest, executor: GitExecutor, sink: ExportSink) -> CloneResult:
    """
    Bring request.clone_dir to the requested state and export its metadata.

    Raises:
        StageError: wrapping the CloneError of the stage that failed
    """
    return CloneRun(request, executor, sink).execute()
