"""
Export sinks for commit metadata.

Later CI steps read the exported values from the platform's environment
store. Two stores are supported: the envman tool, and a key/value file in
the GitHub Actions output format.
"""

import logging
import secrets
import subprocess
from pathlib import Path
from typing import Protocol

from gitclone.lib.errors import MetadataExportError

logger = logging.getLogger(__name__)

ENVMAN_TIMEOUT_SECONDS = 30


class ExportSink(Protocol):
    def export(self, key: str, value: str) -> None:
        ...


class EnvmanSink:
    """Exports through `envman add`."""

    def __init__(self, binary: str = "envman"):
        self.binary = binary

    def export(self, key: str, value: str) -> None:
        cmd = [self.binary, "add", "--key", key, "--value", value]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=ENVMAN_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise MetadataExportError(f"envman add {key}: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise MetadataExportError(f"envman add {key}: {detail}")


class FileSink:
    """
    Appends KEY=value lines to a file.

    Multi-line values use the heredoc form with a random delimiter:

        KEY<<ghadelimiter_abc123
        line one
        line two
        ghadelimiter_abc123
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def export(self, key: str, value: str) -> None:
        if "\n" in value:
            delimiter = f"ghadelimiter_{secrets.token_hex(8)}"
            entry = f"{key}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            entry = f"{key}={value}\n"
        try:
            with open(self.path, "a", encoding="utf-8") as handle:
                handle.write(entry)
        except OSError as e:
            raise MetadataExportError(f"write {key} to {self.path}: {e}") from e


class RecordingSink:
    """Keeps exported fields in memory, in export order."""

    def __init__(self):
        self.fields: list[tuple[str, str]] = []

    def export(self, key: str, value: str) -> None:
        self.fields.append((key, value))

    def as_dict(self) -> dict[str, str]:
        return dict(self.fields)


def sink_from_config(export_file: Path | None) -> ExportSink:
    """FileSink when an export file is configured, envman otherwise."""
    if export_file is not None:
        logger.debug(f"Exporting metadata to {export_file}")
        return FileSink(export_file)
    return EnvmanSink()
