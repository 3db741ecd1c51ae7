import logging
from typing import Optional, Sequence

from ..config import RAWG, RAWG_BASE_URL, SEARCH_PAGE_SIZE
from .base import CoverProvider
from .candidate import Candidate
from .platforms import RAWG_PLATFORMS

logger = logging.getLogger(__name__)


class RAWGProvider(CoverProvider):
    name = RAWG
    display_name = "RAWG"
    platform_table = RAWG_PLATFORMS

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        # RAWG answers without a key too, with a lower rate limit
        super().__init__(**kwargs)
        self.api_key = api_key or None
        self.base_url = RAWG_BASE_URL

    def search(self, title: str, platform_ids: Sequence[int]) -> list[Candidate]:
        params = {"search": title, "page_size": str(SEARCH_PAGE_SIZE)}
        if self.api_key:
            params["key"] = self.api_key
        if platform_ids:
            params["platforms"] = ",".join(str(pid) for pid in platform_ids)

        data = self._request_json("GET", f"{self.base_url}/games", params=params)
        if not isinstance(data, dict):
            raise self._unexpected("search response is not an object")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise self._unexpected("'results' is not a list")

        return [
            Candidate(
                id=game.get("id"),
                name=game.get("name") or "",
                platform_ids=self._platform_ids(game),
                raw=game,
            )
            for game in results
            if isinstance(game, dict)
        ]

    def resolve_image(self, candidate: Candidate) -> Optional[str]:
        return candidate.raw.get("background_image") or None

    @staticmethod
    def _platform_ids(game: dict) -> tuple:
        # platforms: [{"platform": {"id": 11, "name": "GameCube"}}, ...]
        ids = []
        for entry in game.get("platforms") or []:
            platform = entry.get("platform") if isinstance(entry, dict) else None
            if isinstance(platform, dict) and platform.get("id") is not None:
                ids.append(platform["id"])
        return tuple(ids)
