"""Read change-log entries from a git repository."""

from __future__ import annotations

import subprocess
from typing import List, Optional

from .exceptions import ChangelogError
from .model import ChangeEntry

# Unit and record separators keep multi-line commit bodies intact
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_FORMAT = f"%H{_FIELD_SEP}%an{_FIELD_SEP}%B{_RECORD_SEP}"


def parse_git_log(output: str) -> List[ChangeEntry]:
    """Parse ``git log`` output produced with the change-log format."""
    entries = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        commit_id, author, msg = record.split(_FIELD_SEP, 2)
        entries.append(ChangeEntry(msg=msg.strip(), author=author or None, commit_id=commit_id))
    return entries


def read_git_changelog(rev_range: Optional[str] = None, local_dir: str = ".") -> List[ChangeEntry]:
    """Return the commits of ``rev_range`` (default: the last commit)."""
    cmd = ["git", "-C", local_dir, "log", f"--format={_FORMAT}"]
    cmd.append(rev_range if rev_range else "-1")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError as e:
        raise ChangelogError("git is not installed") from e
    except subprocess.CalledProcessError as e:
        raise ChangelogError(f"Git command failed:\n{e.stderr}") from e
    return parse_git_log(result.stdout)
