import logging
from typing import Optional, Sequence

from ..common.exceptions import MetadataServiceError
from ..common.validation import validate_credentials
from ..config import IGDB, IGDB_BASE_URL, IGDB_IMAGE_URL, IGDB_TOKEN_URL, SEARCH_PAGE_SIZE
from .base import CoverProvider
from .candidate import Candidate
from .platforms import IGDB_PLATFORMS

logger = logging.getLogger(__name__)


class IGDBProvider(CoverProvider):
    name = IGDB
    display_name = "IGDB"
    platform_table = IGDB_PLATFORMS

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.client_id = client_id or None
        self.client_secret = client_secret or None
        self.base_url = IGDB_BASE_URL
        self._access_token: Optional[str] = None
        self._token_error: Optional[MetadataServiceError] = None

    def check_credentials(self) -> None:
        validate_credentials(
            self.display_name,
            {"a Client ID": self.client_id, "a Client Secret": self.client_secret},
        )

    def begin_run(self) -> None:
        # Tokens are never reused across runs nor refreshed within one
        self._access_token = None
        self._token_error = None

    def fetch_access_token(self) -> str:
        """Exchange client id and secret for an app access token."""
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "client_credentials",
        }
        data = self._request_json(
            "POST", IGDB_TOKEN_URL, service="IGDB auth", json=payload
        )
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise MetadataServiceError("IGDB auth", "no access_token in response")
        logger.info("Obtained IGDB access token")
        return token

    def access_token(self) -> str:
        # A failed exchange is not retried until the next run
        if self._token_error is not None:
            raise self._token_error
        if self._access_token is None:
            try:
                self._access_token = self.fetch_access_token()
            except MetadataServiceError as e:
                self._token_error = e
                raise
        return self._access_token

    @staticmethod
    def build_query(title: str, platform_ids: Sequence[int] = ()) -> str:
        escaped = title.replace("\\", "\\\\").replace('"', '\\"')
        query = f'search "{escaped}"; fields name,cover.*,platforms; limit {SEARCH_PAGE_SIZE};'
        if platform_ids:
            query += f" where platforms = ({','.join(str(pid) for pid in platform_ids)});"
        return query

    def search(self, title: str, platform_ids: Sequence[int]) -> list[Candidate]:
        headers = {
            "Accept": "application/json",
            "Client-ID": self.client_id,
            "Authorization": f"Bearer {self.access_token()}",
        }
        data = self._request_json(
            "POST",
            f"{self.base_url}/games",
            headers=headers,
            data=self.build_query(title, platform_ids).encode("utf-8"),
        )
        if not isinstance(data, list):
            raise self._unexpected("games response is not a list")

        return [
            Candidate(
                id=game.get("id"),
                name=game.get("name") or "",
                platform_ids=tuple(game.get("platforms") or ()),
                raw=game,
            )
            for game in data
            if isinstance(game, dict)
        ]

    def resolve_image(self, candidate: Candidate) -> Optional[str]:
        cover = candidate.raw.get("cover")
        image_id = cover.get("image_id") if isinstance(cover, dict) else None
        if not image_id:
            return None
        return IGDB_IMAGE_URL.format(image_id=image_id)
