"""
Safe env file parser for step inputs.

Reads KEY=value lines without handing anything to a shell, so a CI job can
pass its inputs as a file (``--env-file``) instead of exporting them.
Values that look like shell expansion are rejected rather than silently
taken literally.
"""

import re
from pathlib import Path

# Tokens and urls may legitimately contain ; or |, so only reject expansion
FORBIDDEN_PATTERNS = [
    r'`',           # backticks
    r'\$\(',        # command substitution
    r'\$\{',        # variable expansion
]

KEY_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_env(text: str) -> dict[str, str]:
    """
    Parse env file content.

    Accepts an optional leading ``export``, blank lines and ``#`` comments.

    Raises:
        ValueError: if a line is malformed or a value contains shell expansion
    """
    result: dict[str, str] = {}

    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue

        if line.startswith('export '):
            line = line[len('export '):].lstrip()

        key, sep, value = line.partition('=')
        if not sep:
            raise ValueError(f"Line {lineno}: expected KEY=value")

        key = key.strip()
        if not KEY_PATTERN.match(key):
            raise ValueError(f"Line {lineno}: invalid key '{key}'")

        value = _unquote(value.strip())
        for pattern in FORBIDDEN_PATTERNS:
            if re.search(pattern, value):
                raise ValueError(f"Line {lineno}: shell expansion not allowed in value of {key}")

        result[key] = value

    return result


def load_env(filepath: str | Path) -> dict[str, str]:
    """
    Load and parse an env file.

    Raises:
        FileNotFoundError: if file doesn't exist
        ValueError: if syntax invalid or forbidden pattern found
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {filepath}")
    return parse_env(path.read_text(encoding="utf-8"))
