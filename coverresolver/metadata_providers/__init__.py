from typing import Optional

from ..common.exceptions import UnknownProviderError
from .base import CoverProvider
from .candidate import Candidate
from .igdb import IGDBProvider
from .rawg import RAWGProvider
from .selector import select_candidate
from .thegamesdb import TheGamesDBProvider

PROVIDERS = {
    RAWGProvider.name: RAWGProvider,
    TheGamesDBProvider.name: TheGamesDBProvider,
    IGDBProvider.name: IGDBProvider,
}


def create_provider(
    name: str,
    api_key: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    **kwargs,
) -> CoverProvider:
    """Instantiate the provider registered under ``name``.

    ``api_key`` feeds RAWG and TheGamesDB; IGDB takes the client id/secret
    pair. Credentials the chosen provider does not use are ignored.
    """
    key = (name or "").lower()
    if key not in PROVIDERS:
        raise UnknownProviderError(name, PROVIDERS.keys())
    if key == IGDBProvider.name:
        return IGDBProvider(client_id=client_id, client_secret=client_secret, **kwargs)
    return PROVIDERS[key](api_key=api_key, **kwargs)


__all__ = [
    "Candidate",
    "CoverProvider",
    "IGDBProvider",
    "PROVIDERS",
    "RAWGProvider",
    "TheGamesDBProvider",
    "create_provider",
    "select_candidate",
]
