import logging
from typing import Any, Optional, Sequence

from ..common.exceptions import MetadataServiceError
from ..common.validation import validate_credentials
from ..config import TGDB_BASE_URL, TGDB_SEARCH_FIELDS, THEGAMESDB
from .base import CoverProvider
from .candidate import Candidate
from .platforms import TGDB_PLATFORMS

logger = logging.getLogger(__name__)


class TheGamesDBProvider(CoverProvider):
    name = THEGAMESDB
    display_name = "TheGamesDB"
    platform_table = TGDB_PLATFORMS

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key or None
        self.base_url = TGDB_BASE_URL

    def check_credentials(self) -> None:
        validate_credentials(self.display_name, {"an API key": self.api_key})

    def search(self, title: str, platform_ids: Sequence[int]) -> list[Candidate]:
        params = {
            "apikey": self.api_key,
            "name": title,
            "fields": TGDB_SEARCH_FIELDS,
        }
        if platform_ids:
            params["filter[platform]"] = ",".join(str(pid) for pid in platform_ids)

        data = self._request_json(
            "GET", f"{self.base_url}/Games/ByGameName", params=params
        )
        if not isinstance(data, dict):
            raise self._unexpected("search response is not an object")

        body = data.get("data") or {}
        if not isinstance(body, dict):
            raise self._unexpected("'data' is not an object")
        games = body.get("games") or []
        if not isinstance(games, list):
            raise self._unexpected("'data.games' is not a list")

        candidates = []
        for game in games:
            if not isinstance(game, dict):
                continue
            platform = game.get("platform")
            candidates.append(
                Candidate(
                    id=game.get("id"),
                    name=game.get("game_title") or "",
                    platform_ids=(platform,) if platform is not None else (),
                    raw=game,
                )
            )
        return candidates

    def resolve_image(self, candidate: Candidate) -> Optional[str]:
        # Only games advertising a front box-art are worth the second request
        boxart = candidate.raw.get("boxart")
        if not isinstance(boxart, dict) or not boxart.get("front"):
            return None
        if candidate.id is None:
            return None

        try:
            return self.fetch_image_url(candidate.id)
        except MetadataServiceError as e:
            logger.warning(f"Image lookup failed for TheGamesDB game {candidate.id}: {e}")
            return None

    def fetch_image_url(self, game_id: int) -> Optional[str]:
        """Query /Games/Images for ``game_id`` and pick one image.

        Preference: a box-art whose filename contains "front", then the
        first box-art, then the first screenshot.
        """
        data = self._request_json(
            "GET",
            f"{self.base_url}/Games/Images",
            params={"apikey": self.api_key, "games_id": str(game_id)},
        )
        if not isinstance(data, dict):
            raise self._unexpected("images response is not an object")

        body = data.get("data") or {}
        if not isinstance(body, dict):
            raise self._unexpected("'data' is not an object")
        images = body.get(str(game_id))
        if not isinstance(images, dict):
            return None

        base_url = self._base_url(data.get("base_url"))

        boxart = self._with_filename(images.get("boxart"))
        front = next((img for img in boxart if "front" in img["filename"]), None)
        if front:
            return f"{base_url}/boxart/front/{front['filename']}"
        if boxart:
            return f"{base_url}/boxart/front/{boxart[0]['filename']}"

        screenshots = self._with_filename(images.get("screenshots"))
        if screenshots:
            return f"{base_url}/screenshots/{screenshots[0]['filename']}"

        return None

    def _base_url(self, value: Any) -> str:
        # Either a plain string or a {"original": ..., "small": ...} mapping
        if isinstance(value, dict):
            value = value.get("original")
        if not isinstance(value, str) or not value:
            raise self._unexpected("missing 'base_url'")
        return value.rstrip("/")

    @staticmethod
    def _with_filename(entries: Any) -> list[dict]:
        if not isinstance(entries, list):
            return []
        return [
            img for img in entries
            if isinstance(img, dict) and isinstance(img.get("filename"), str)
        ]
