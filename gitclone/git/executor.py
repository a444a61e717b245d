"""
Typed git executor.

One method per logical operation the clone step needs. The decision logic
in gitclone.checkout only talks to this interface, so tests can swap in a
recording fake.

Return type conventions:
- Mutating operations return None and raise GitCommandError on failure.
- Read-only probes (is_repository, is_shallow, remote_get_url,
  conflicted_files) never raise; they return False/None/[] instead.
"""

import logging
from pathlib import Path

from gitclone.git.runner import run_git, GitResult, DEFAULT_TIMEOUT
from gitclone.lib.credentials import mask_url

logger = logging.getLogger(__name__)

# Identity used for local merge commits when the runner has none configured
MERGE_USER_NAME = "gitclone"
MERGE_USER_EMAIL = "gitclone@localhost"


class GitCommandError(Exception):
    """A git command exited non-zero or timed out."""

    def __init__(self, args: list[str], result: GitResult):
        self.args_list = args
        self.result = result
        detail = result.stderr.strip() or result.stdout.strip() or f"exit code {result.returncode}"
        super().__init__(f"git {_display(args)}: {detail}")


def _display(args: list[str]) -> str:
    return " ".join(mask_url(a) for a in args)


class GitExecutor:
    """Runs git operations against a single working directory."""

    def __init__(self, repo_dir: Path, timeout: int = DEFAULT_TIMEOUT):
        self.repo_dir = Path(repo_dir)
        self.timeout = timeout

    def _run(self, args: list[str]) -> GitResult:
        logger.info(f"$ git {_display(args)}")
        result = run_git(args, self.repo_dir, timeout=self.timeout)
        if not result.success:
            raise GitCommandError(args, result)
        return result

    # Repository setup

    def init(self) -> None:
        self.repo_dir.mkdir(parents=True, exist_ok=True)
        self._run(["init"])

    def remote_add(self, name: str, url: str) -> None:
        self._run(["remote", "add", name, url])

    def config_set(self, key: str, value: str) -> None:
        self._run(["config", key, value])

    # History

    def fetch(self, remote: str, ref: str | None = None, depth: int = 0) -> None:
        """
        Fetch ref from remote.

        depth > 0 limits history to that many commits. depth == 0 means full
        history; on a repository that is already shallow this becomes
        --unshallow so the missing history is actually downloaded.
        """
        args = ["fetch"]
        if depth > 0:
            args.append(f"--depth={depth}")
        elif self.is_shallow():
            args.append("--unshallow")
        args.append(remote)
        if ref:
            args.append(ref)
        self._run(args)

    def checkout(self, ref: str | None = None, detach: bool = False) -> None:
        args = ["checkout"]
        if detach:
            args.append("--detach")
        if ref:
            args.append(ref)
        self._run(args)

    def merge(self, ref: str, ff_only: bool = False) -> None:
        if ff_only:
            self._run(["merge", "--ff-only", ref])
            return
        args = []
        if not self._has_identity():
            args += ["-c", f"user.name={MERGE_USER_NAME}", "-c", f"user.email={MERGE_USER_EMAIL}"]
        self._run(args + ["merge", "--no-edit", ref])

    def submodule_update(self) -> None:
        self._run(["submodule", "update", "--init", "--recursive"])

    def submodule_foreach(self, command: str) -> None:
        self._run(["submodule", "foreach", "--recursive", command])

    def reset_hard(self, ref: str = "HEAD") -> None:
        self._run(["reset", "--hard", ref])

    def clean(self) -> None:
        """Remove untracked and ignored files and directories."""
        self._run(["clean", "-x", "-d", "-f"])

    # Reads

    def log(self, fmt: str, ref: str = "HEAD") -> str:
        """Return a single commit's fields rendered with a --format string."""
        result = self._run(["log", "-1", f"--format={fmt}", ref])
        return result.stdout.strip()

    def rev_list_count(self, ref: str = "HEAD") -> int:
        args = ["rev-list", "--count", ref]
        result = self._run(args)
        try:
            return int(result.stdout.strip())
        except ValueError:
            raise GitCommandError(args, result) from None

    def is_repository(self) -> bool:
        """True when the directory itself holds a .git folder."""
        return (self.repo_dir / ".git").is_dir()

    def is_shallow(self) -> bool:
        return (self.repo_dir / ".git" / "shallow").exists()

    def remote_get_url(self, name: str) -> str | None:
        """Configured url for a remote, or None if the remote doesn't exist."""
        result = run_git(["config", "--get", f"remote.{name}.url"], self.repo_dir, timeout=self.timeout)
        if result.success:
            return result.stdout.strip() or None
        return None

    def conflicted_files(self) -> list[str]:
        """Get list of files with unresolved conflicts."""
        result = run_git(["diff", "--name-only", "--diff-filter=U"], self.repo_dir, timeout=self.timeout)
        return [f.strip() for f in result.stdout.splitlines() if f.strip()]

    def _has_identity(self) -> bool:
        result = run_git(["config", "--get", "user.email"], self.repo_dir, timeout=self.timeout)
        return result.success and bool(result.stdout.strip())
