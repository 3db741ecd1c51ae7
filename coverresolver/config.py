"""Configuration and constants for the coverresolver package."""
from __future__ import annotations

from typing import Dict

# Provider names as accepted by the CLI and the provider registry
RAWG = "rawg"
THEGAMESDB = "thegamesdb"
IGDB = "igdb"

RAWG_BASE_URL = "https://api.rawg.io/api"
TGDB_BASE_URL = "https://api.thegamesdb.net/v1"
IGDB_BASE_URL = "https://api.igdb.com/v4"
IGDB_TOKEN_URL = "https://id.twitch.tv/oauth2/token"
IGDB_IMAGE_URL = "https://images.igdb.com/igdb/image/upload/t_cover_big/{image_id}.jpg"

# Max candidates requested per search
SEARCH_PAGE_SIZE = 10

# Fields requested from TheGamesDB ByGameName
TGDB_SEARCH_FIELDS = "platform,release_date,boxart"

# Seconds, applied to every single HTTP call
HTTP_TIMEOUT = 10

# Pause between two consecutive items of a batch, in seconds.
# IGDB tolerates more requests per second than the other two.
PROVIDER_DELAYS: Dict[str, float] = {
    RAWG: 1.0,
    THEGAMESDB: 1.0,
    IGDB: 0.25,
}

DEFAULT_OUTPUT_FILE = "games-with-covers.json"

# Environment variables read by the CLI when no option is given
ENV_RAWG_KEY = "RAWG_API_KEY"
ENV_TGDB_KEY = "TGDB_API_KEY"
ENV_IGDB_CLIENT_ID = "IGDB_CLIENT_ID"
ENV_IGDB_CLIENT_SECRET = "IGDB_CLIENT_SECRET"
ENV_LOG_FORMAT = "COVERRESOLVER_LOG_FORMAT"

# Sample list printed by `coverresolver example`
EXAMPLE_GAMES = [
    {"title": "Luigi's Mansion", "systemName": "Nintendo GameCube"},
    {"title": "Animal Crossing", "systemName": "Nintendo GameCube"},
    {"title": "Super Mario Sunshine", "systemName": "Nintendo GameCube"},
    {"title": "The Legend of Zelda: Wind Waker", "systemName": "Nintendo GameCube"},
    {"title": "Luigi's Mansion: Dark Moon", "systemName": "Nintendo 3DS"},
    {"title": "The Legend of Zelda: Majora's Mask 3D", "systemName": "Nintendo 3DS"},
]
