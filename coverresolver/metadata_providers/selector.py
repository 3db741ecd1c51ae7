from __future__ import annotations

from typing import Optional, Sequence

from .candidate import Candidate


def select_candidate(
    candidates: Sequence[Candidate],
    title: str,
    platform_ids: Sequence[int] = (),
) -> Optional[Candidate]:
    """Pick the single best search result for ``title``.

    Rules, in order:
      1. a candidate whose name equals the title, ignoring case;
      2. the first candidate released on one of ``platform_ids``;
      3. the first candidate as ordered by the provider.

    An exact title match wins even when its platform is wrong.
    Returns None for an empty candidate list.
    """
    if not candidates:
        return None

    wanted = title.lower()
    for candidate in candidates:
        if candidate.name and candidate.name.lower() == wanted:
            return candidate

    if platform_ids:
        wanted_platforms = set(platform_ids)
        for candidate in candidates:
            if wanted_platforms.intersection(candidate.platform_ids):
                return candidate

    return candidates[0]
