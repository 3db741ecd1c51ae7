from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class Candidate:
    """One search result, reduced to what matching needs."""

    id: Optional[int]
    name: str
    platform_ids: Tuple[int, ...] = ()
    # Provider record, kept for image resolution
    raw: dict = field(default_factory=dict)
