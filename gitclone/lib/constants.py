"""Shared constants for gitclone."""

# Step inputs, read from the environment
INPUT_REPOSITORY_URL = "repository_url"
INPUT_CLONE_DIR = "clone_into_dir"
INPUT_COMMIT = "commit"
INPUT_TAG = "tag"
INPUT_BRANCH = "branch"
INPUT_BRANCH_DEST = "branch_dest"
INPUT_PR_ID = "pull_request_id"
INPUT_PR_REPOSITORY_URL = "pull_request_repository_url"
INPUT_PR_MERGE_BRANCH = "pull_request_merge_branch"
INPUT_PR_REPOSITORY_PRIVATE = "pull_request_repository_private"
INPUT_RESET_REPOSITORY = "reset_repository"
INPUT_CLONE_DEPTH = "clone_depth"
INPUT_MANUAL_MERGE = "manual_merge"
INPUT_UPDATE_SUBMODULES = "update_submodules"
INPUT_SSL_VERIFY = "ssl_verify"
INPUT_HTTP_USER = "git_http_username"
INPUT_HTTP_TOKEN = "git_http_password"
INPUT_EXPORT_FILE = "export_file"
INPUT_GIT_TIMEOUT = "git_timeout"

ALL_INPUTS = (
    INPUT_REPOSITORY_URL,
    INPUT_CLONE_DIR,
    INPUT_COMMIT,
    INPUT_TAG,
    INPUT_BRANCH,
    INPUT_BRANCH_DEST,
    INPUT_PR_ID,
    INPUT_PR_REPOSITORY_URL,
    INPUT_PR_MERGE_BRANCH,
    INPUT_PR_REPOSITORY_PRIVATE,
    INPUT_RESET_REPOSITORY,
    INPUT_CLONE_DEPTH,
    INPUT_MANUAL_MERGE,
    INPUT_UPDATE_SUBMODULES,
    INPUT_SSL_VERIFY,
    INPUT_HTTP_USER,
    INPUT_HTTP_TOKEN,
    INPUT_EXPORT_FILE,
    INPUT_GIT_TIMEOUT,
)

# Remotes
ORIGIN = "origin"
FORK_REMOTE = "fork"

# Exported commit metadata, in export order. Key names are consumed by later
# CI steps and must not change.
EXPORT_COMMIT_HASH = "GIT_CLONE_COMMIT_HASH"
EXPORT_MESSAGE_SUBJECT = "GIT_CLONE_COMMIT_MESSAGE_SUBJECT"
EXPORT_MESSAGE_BODY = "GIT_CLONE_COMMIT_MESSAGE_BODY"
EXPORT_AUTHOR_NAME = "GIT_CLONE_COMMIT_AUTHOR_NAME"
EXPORT_AUTHOR_EMAIL = "GIT_CLONE_COMMIT_AUTHOR_EMAIL"
EXPORT_COMMITTER_NAME = "GIT_CLONE_COMMIT_COMMITER_NAME"
EXPORT_COMMITTER_EMAIL = "GIT_CLONE_COMMIT_COMMITER_EMAIL"
EXPORT_COMMIT_COUNT = "GIT_CLONE_COMMIT_COUNT"

LOG_FIELDS = (
    (EXPORT_COMMIT_HASH, "%H"),
    (EXPORT_MESSAGE_SUBJECT, "%s"),
    (EXPORT_MESSAGE_BODY, "%b"),
    (EXPORT_AUTHOR_NAME, "%an"),
    (EXPORT_AUTHOR_EMAIL, "%ae"),
    (EXPORT_COMMITTER_NAME, "%cn"),
    (EXPORT_COMMITTER_EMAIL, "%ce"),
)

# Process exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2
