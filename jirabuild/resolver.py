from __future__ import annotations

from typing import Optional, Sequence

from .model import TransitionCandidate


def resolve_transition_id(
    available: Optional[Sequence[TransitionCandidate]],
    desired_name: Optional[str],
) -> Optional[int]:
    """Return the id of the first transition named ``desired_name``, ignoring case.

    Candidates without a name are skipped. When two names differ only in case
    the one reported first by the tracker wins.
    """
    if desired_name is None:
        return None
    if not available:
        return None

    wanted = desired_name.lower()
    for candidate in available:
        if candidate.name is None:
            continue
        if candidate.name.lower() == wanted:
            return candidate.id
    return None
