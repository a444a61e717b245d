"""Shared fixtures: a recording stand-in for GitExecutor."""

from pathlib import Path

import pytest

from gitclone.git.executor import GitCommandError
from gitclone.git.runner import GitResult
from gitclone.lib.config import CheckoutRequest
from gitclone.lib.export import RecordingSink

REPO_URL = "https://github.com/org/repo.git"

LOG_VALUES = {
    "%H": "0123456789abcdef0123456789abcdef01234567",
    "%s": "Fix the widget",
    "%b": "Longer explanation\n\nSigned-off-by: Dev <dev@example.com>",
    "%an": "Dev",
    "%ae": "dev@example.com",
    "%cn": "Bot",
    "%ce": "bot@example.com",
}


class FakeExecutor:
    """
    Records every mutating git operation as a tuple, in call order.

    Failures are scripted with fail(prefix..., times=n): the next n calls
    whose tuple starts with prefix raise GitCommandError.

    merged_branches lists the local branches a non-fast-forward merge
    landed on; remote url changes made through config_set show up in remotes.
    """

    def __init__(self, repo_dir=Path("/work/repo"), repository=False, origin_url=None,
                 shallow=False, commit_count=42):
        self.repo_dir = repo_dir
        self.repository = repository
        self.remotes: dict[str, str] = {}
        if origin_url:
            self.remotes["origin"] = origin_url
        self.shallow = shallow
        self.commit_count = commit_count
        self.log_values = dict(LOG_VALUES)
        self.conflicts: list[str] = []
        self.detached = False
        self.branch: str | None = None
        self.merged_branches: list[str] = []
        self.calls: list[tuple] = []
        self._failures: list[list] = []

    def fail(self, *prefix, times=1):
        self._failures.append([prefix, times])

    def _check(self, call: tuple) -> None:
        for failure in self._failures:
            prefix, times = failure
            if times > 0 and call[:len(prefix)] == prefix:
                failure[1] -= 1
                args = [str(a) for a in call]
                raise GitCommandError(args, GitResult(returncode=1, stdout="", stderr="scripted failure"))

    def _record(self, *call) -> None:
        self.calls.append(call)
        self._check(call)

    def init(self):
        self._record("init")
        self.repository = True

    def remote_add(self, name, url):
        self._record("remote_add", name, url)
        self.remotes[name] = url

    def config_set(self, key, value):
        self._record("config_set", key, value)
        section, _, name = key.partition(".")
        if section == "remote" and name.endswith(".url"):
            self.remotes[name[:-len(".url")]] = value

    def fetch(self, remote, ref=None, depth=0):
        self._record("fetch", remote, ref, depth)

    def checkout(self, ref=None, detach=False):
        self._record("checkout", ref, detach)
        self.detached = detach
        self.branch = None if detach else ref

    def merge(self, ref, ff_only=False):
        self._record("merge", ref, ff_only)
        if not self.detached and not ff_only:
            self.merged_branches.append(self.branch)

    def submodule_update(self):
        self._record("submodule_update")

    def submodule_foreach(self, command):
        self._record("submodule_foreach", command)

    def reset_hard(self, ref="HEAD"):
        self._record("reset_hard", ref)

    def clean(self):
        self._record("clean")

    def log(self, fmt, ref="HEAD"):
        self._check(("log", fmt))
        return self.log_values[fmt]

    def rev_list_count(self, ref="HEAD"):
        self._check(("rev_list_count", ref))
        return self.commit_count

    def is_repository(self):
        return self.repository

    def is_shallow(self):
        return self.shallow

    def remote_get_url(self, name):
        return self.remotes.get(name)

    def conflicted_files(self):
        return list(self.conflicts)

    def ops(self, name: str) -> list[tuple]:
        """Recorded calls of one operation."""
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def make_request():
    def _make(**overrides) -> CheckoutRequest:
        fields = {"repository_url": REPO_URL, "clone_dir": Path("/work/repo")}
        fields.update(overrides)
        return CheckoutRequest(**fields)
    return _make
