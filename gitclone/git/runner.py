"""Git command runner with timeout handling."""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from gitclone.lib.credentials import mask_url

DEFAULT_TIMEOUT = 300


@dataclass
class GitResult:
    """Result of a git command."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out


def run_git(
    args: list[str],
    cwd: Path,
    timeout: int = DEFAULT_TIMEOUT,
) -> GitResult:
    """
    Run a git command with timeout handling.

    Interactive credential prompts are disabled so a clone that needs
    credentials it was not given fails instead of hanging the CI job.

    Args:
        args: Git command arguments (e.g., ["fetch", "origin", "main"])
        cwd: Working directory for the command
        timeout: Timeout in seconds

    Returns:
        GitResult with returncode, stdout, stderr, and timed_out flag
    """
    cmd = ["git", "-C", str(cwd)] + args
    env = dict(os.environ, GIT_TERMINAL_PROMPT="0")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
        )
        return GitResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    except subprocess.TimeoutExpired:
        # args may carry a credentialed remote url
        shown = " ".join(mask_url(a) for a in args)
        return GitResult(
            returncode=-1,
            stdout="",
            stderr=f"git {shown}: command timed out after {timeout}s",
            timed_out=True,
        )
