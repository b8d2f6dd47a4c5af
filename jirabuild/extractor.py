"""Find issue identifiers in change-log text."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern, Set

from .exceptions import ConfigError
from .model import ChangeEntry

# A project key of two or more word characters starting with a letter, a dash and
# a number without leading zero. The trailing group stops "DOT-4.1" from matching
# as DOT-4 while still accepting "DOT-4." at the end of a sentence.
DEFAULT_ISSUE_PATTERN: Pattern[str] = re.compile(
    r"([a-zA-Z][a-zA-Z0-9_]+-[1-9][0-9]*)([^.]|\.[^0-9]|\.$|$)"
)


def compile_issue_pattern(pattern: Optional[str]) -> Pattern[str]:
    """Compile a configured issue pattern, falling back to the default."""
    if pattern is None or not pattern.strip():
        return DEFAULT_ISSUE_PATTERN
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise ConfigError(f"Invalid issue pattern '{pattern}': {e}") from e


def extract_identifiers(text: Optional[str], pattern: Pattern[str]) -> Set[str]:
    """Return the distinct identifiers matched by ``pattern`` in ``text``.

    The identifier is the first capture group, or the whole match when the
    pattern has no groups. Case is preserved, so "TR-1" and "tr-1" are kept
    apart.
    """
    if not text:
        return set()
    group = 1 if pattern.groups else 0
    found = set()
    for match in pattern.finditer(text):
        token = match.group(group)
        if token:
            found.add(token)
    return found


def find_issue_ids(entries: Iterable[ChangeEntry], pattern: Pattern[str]) -> Set[str]:
    """Collect identifiers from every message of a change-log."""
    ids: Set[str] = set()
    for entry in entries:
        ids |= extract_identifiers(entry.msg, pattern)
    return ids
