"""Commit message normalization for smartmsg.

Suggested messages are reformatted into a summary line plus an optional
body. Nothing is ever truncated; the 72-character summary limit is a
prompt instruction only.
"""

import re

FALLBACK_MESSAGE = "chore: update"

CONVENTIONAL_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

_LINE_SPLIT_RE = re.compile(r"\r?\n")

# "[feat]:" or "[fix(api)] :" at the start of the summary
_BRACKETED_TYPE_RE = re.compile(
    r"^\[(?P<type>" + "|".join(CONVENTIONAL_TYPES) + r")(?P<scope>\([^)]*\))?\]\s*:",
    re.IGNORECASE,
)

_NOISE_RE = re.compile(r"^[#\s]+|[#\s]+$")


def _clean_summary(line: str) -> str:
    """Normalize a candidate summary line."""
    summary = _NOISE_RE.sub("", line)
    summary = _BRACKETED_TYPE_RE.sub(
        lambda m: f"{m.group('type')}{m.group('scope') or ''}:", summary
    )
    return _NOISE_RE.sub("", summary)


def sanitize_message(text: str) -> str:
    """Normalize a suggested commit message.

    The summary is the first line that is non-empty after cleanup. A
    bracketed conventional type prefix is unwrapped, and '#' and
    whitespace noise is trimmed. Remaining non-empty lines become the
    body, separated from the summary by one blank line.

    Args:
        text: Raw suggested message.

    Returns:
        The normalized message. FALLBACK_MESSAGE if no summary exists.
    """
    lines = _LINE_SPLIT_RE.split(text or "")

    summary = ""
    rest: list[str] = []
    for index, line in enumerate(lines):
        summary = _clean_summary(line)
        if summary:
            rest = lines[index + 1:]
            break

    if not summary:
        return FALLBACK_MESSAGE

    body = "\n".join(line.rstrip() for line in rest if line.strip())
    if body:
        return f"{summary}\n\n{body}"
    return summary
