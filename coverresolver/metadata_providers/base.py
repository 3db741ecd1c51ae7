from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Optional, Sequence, Tuple

import requests

from ..common.exceptions import MetadataServiceError
from ..config import HTTP_TIMEOUT, PROVIDER_DELAYS
from ..logging_cfg import redact_secrets
from .candidate import Candidate
from .platforms import PlatformTable, normalize_platform
from .selector import select_candidate

logger = logging.getLogger(__name__)


class CoverProvider(ABC):
    """A game-metadata service able to turn a title into a cover URL.

    Subclasses implement ``search`` and ``resolve_image``; ``find_cover``
    strings the steps together for a single title.
    """

    name: str = ""
    display_name: str = ""
    platform_table: PlatformTable = MappingProxyType({})

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = HTTP_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def delay_seconds(self) -> float:
        return PROVIDER_DELAYS.get(self.name, 1.0)

    def check_credentials(self) -> None:
        """
        Raise MissingCredentialsError when required credentials are absent.
        """
        return None

    def begin_run(self) -> None:
        """
        Reset per-run state before the first item of a batch.
        """
        return None

    def normalize_platform(self, system_name: str) -> Tuple[int, ...]:
        return normalize_platform(system_name, self.platform_table)

    @abstractmethod
    def search(self, title: str, platform_ids: Sequence[int]) -> list[Candidate]:
        """
        Query the service for ``title``, optionally filtered by platform.
        """
        pass

    @abstractmethod
    def resolve_image(self, candidate: Candidate) -> Optional[str]:
        """
        Turn the chosen candidate into an image URL, or None.
        """
        pass

    def find_cover(self, title: str, system_name: str) -> Optional[str]:
        platform_ids = self.normalize_platform(system_name)
        candidates = self.search(title, platform_ids)
        best = select_candidate(candidates, title, platform_ids)
        if best is None:
            logger.info(f"No {self.display_name} results for '{title}'")
            return None
        logger.debug(f"{self.display_name} matched '{title}' to '{best.name}' (id={best.id})")
        return self.resolve_image(best) or None

    def close(self) -> None:
        self.session.close()

    def _request_json(self, method: str, url: str, service: Optional[str] = None, **kwargs) -> Any:
        """Perform one HTTP call and decode its JSON body.

        Raises:
            MetadataServiceError: On network errors, non-2xx statuses or a
                body that is not JSON
        """
        service = service or self.display_name
        logger.debug(
            f"{method} {url} params={redact_secrets(kwargs.get('params'))} "
            f"json={redact_secrets(kwargs.get('json'))}"
        )
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            raise MetadataServiceError(service, f"HTTP {status}", status=status) from e
        except requests.RequestException as e:
            raise MetadataServiceError(service, type(e).__name__) from e

        try:
            return response.json()
        except ValueError as e:
            raise MetadataServiceError(service, "response is not valid JSON") from e

    def _unexpected(self, what: str) -> MetadataServiceError:
        return MetadataServiceError(self.display_name, f"unexpected payload: {what}")
