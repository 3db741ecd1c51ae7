"""Platform name to provider platform-id tables.

Each metadata service numbers platforms its own way. Keys are lower-cased
display names as users type them ("Nintendo GameCube"); values are the ids
to pass as a search filter. Lookups are exact; an unknown name simply means
the search runs without a platform filter.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

PlatformTable = Mapping[str, Tuple[int, ...]]

RAWG_PLATFORMS: PlatformTable = MappingProxyType({
    # Microsoft
    "microsoft windows": (4,),
    "microsoft xbox 360": (14,),
    "microsoft xbox": (80,),
    # Nintendo
    "nintendo 3ds": (8,),
    "nintendo 64": (83,),
    "nintendo ds": (9,),
    "nintendo gamecube": (11,),
    "nintendo switch": (7,),
    "nintendo wii u": (10,),
    "nintendo wii": (10,),
    # Sega
    "sega dreamcast": (106,),
    "sega saturn": (107,),
    # Sony
    "sony playstation 2": (15,),
    "sony playstation 3": (16,),
    "sony playstation 4": (18,),
    "sony playstation 5": (187,),
    "sony playstation portable": (17,),
    "sony playstation vita": (19,),
    "sony playstation": (27,),
})

TGDB_PLATFORMS: PlatformTable = MappingProxyType({
    # Microsoft
    "microsoft windows": (1,),
    "microsoft xbox 360": (15,),
    "microsoft xbox": (14,),
    # Nintendo
    "nintendo 3ds": (4912,),
    "nintendo 64": (3,),
    "nintendo ds": (12,),
    "nintendo gamecube": (2,),
    "nintendo switch": (4971,),
    "nintendo wii u": (38,),
    "nintendo wii": (9,),
    # Sega
    "sega dreamcast": (16,),
    "sega saturn": (17,),
    # Sony
    "sony playstation 2": (8,),
    "sony playstation 3": (4911,),
    "sony playstation 4": (4919,),
    "sony playstation 5": (4980,),
    "sony playstation portable": (13,),
    "sony playstation vita": (39,),
    "sony playstation": (10,),
})

IGDB_PLATFORMS: PlatformTable = MappingProxyType({
    # Microsoft
    "microsoft windows": (6,),
    "microsoft xbox 360": (12,),
    "microsoft xbox": (11,),
    # Nintendo
    "nintendo 3ds": (37,),
    "nintendo 64": (4,),
    "nintendo ds": (20,),
    "nintendo gamecube": (21,),
    "nintendo switch": (130,),
    "nintendo wii u": (41,),
    "nintendo wii": (5,),
    # Sega
    "sega dreamcast": (23,),
    "sega saturn": (32,),
    # Sony
    "sony playstation 2": (8,),
    "sony playstation 3": (9,),
    "sony playstation 4": (48,),
    "sony playstation 5": (167,),
    "sony playstation portable": (38,),
    "sony playstation vita": (46,),
    "sony playstation": (7,),
})


def normalize_platform(system_name: str, table: PlatformTable) -> Tuple[int, ...]:
    """Return the provider ids for ``system_name``, or () when unknown."""
    if not system_name:
        return ()
    return tuple(table.get(system_name.lower(), ()))


def supported_platforms(table: PlatformTable) -> list[str]:
    return sorted(table.keys())
