"""Export commit metadata of the checked out HEAD for later CI steps."""

import logging

from gitclone.git.executor import GitExecutor, GitCommandError
from gitclone.lib.constants import LOG_FIELDS, EXPORT_COMMIT_COUNT
from gitclone.lib.errors import MetadataExportError
from gitclone.lib.export import ExportSink

logger = logging.getLogger(__name__)


def read_metadata(executor: GitExecutor) -> list[tuple[str, str]]:
    """
    Read HEAD's metadata as (key, value) pairs, in export order.

    Raises:
        MetadataExportError: if any git read fails
    """
    fields = []
    try:
        for key, fmt in LOG_FIELDS:
            fields.append((key, executor.log(fmt)))
        fields.append((EXPORT_COMMIT_COUNT, str(executor.rev_list_count("HEAD"))))
    except GitCommandError as e:
        raise MetadataExportError(f"read commit metadata: {e}") from e
    return fields


def export_metadata(executor: GitExecutor, sink: ExportSink) -> int:
    """
    Export HEAD's metadata to sink, one field at a time.

    The first failing export stops the rest.

    Returns:
        Number of exported fields
    """
    fields = read_metadata(executor)
    for key, value in fields:
        logger.info(f"=> {key}")
        logger.debug(f"   {value}")
        sink.export(key, value)
    return len(fields)
