"""Batch orchestration: resolve covers for a whole game list.

A run moves through IDLE -> VALIDATING -> RUNNING -> COMPLETE. Validation
failures (bad JSON, bad shape, missing credentials) move it to ABORTED and
are raised before a single request is sent. Once RUNNING, a failure only
costs the current title its cover.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Any, Callable, Optional, Sequence

from .common.exceptions import CoverResolverError, format_exception_chain
from .common.models import BatchResult, GameItem
from .common.validation import is_absolute_url, parse_game_list, validate_game_list
from .logging_cfg import set_correlation_id
from .metadata_providers import CoverProvider

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class BatchState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    RUNNING = "running"
    COMPLETE = "complete"
    ABORTED = "aborted"


class BatchOrchestrator:
    def __init__(
        self,
        provider: CoverProvider,
        sleep: Optional[Callable[[float], None]] = None,
        progress_cb: Optional[ProgressCallback] = None,
    ):
        self.provider = provider
        self.sleep = sleep or time.sleep
        self.progress_cb = progress_cb
        self.state = BatchState.IDLE
        self.processed = 0

    def run(self, text: str) -> BatchResult:
        """Validate pasted JSON text and resolve a cover for every entry."""
        return self._run(lambda: parse_game_list(text))

    def run_items(self, data: Sequence[Any]) -> BatchResult:
        """Same as ``run`` for an already decoded list."""
        return self._run(lambda: validate_game_list(data))

    def _run(self, load: Callable[[], list[GameItem]]) -> BatchResult:
        cid = set_correlation_id()
        self.processed = 0
        games = self._validate(load)

        self.state = BatchState.RUNNING
        logger.info(
            f"Resolving covers for {len(games)} games via "
            f"{self.provider.display_name} (run {cid})"
        )
        self.provider.begin_run()

        result = BatchResult()
        total = len(games)
        for index, game in enumerate(games):
            result.items.append(game.with_cover(self._resolve(game)))
            self.processed = index + 1
            self._report(total, game.title)
            if index < total - 1:
                self.sleep(self.provider.delay_seconds)

        self.state = BatchState.COMPLETE
        logger.info(result.summary)
        return result

    def _validate(self, load: Callable[[], list[GameItem]]) -> list[GameItem]:
        self.state = BatchState.VALIDATING
        try:
            self.provider.check_credentials()
            games = load()
        except CoverResolverError as e:
            self.state = BatchState.ABORTED
            logger.error(f"Batch aborted: {e}")
            raise
        return games

    def _resolve(self, game: GameItem) -> Optional[str]:
        try:
            image_url = self.provider.find_cover(game.title, game.system_name)
        except Exception as e:
            logger.error(f"Failed to fetch cover for {game.title}: {format_exception_chain(e)}")
            logger.debug("Cover lookup traceback", exc_info=True)
            return None

        if image_url and not is_absolute_url(image_url):
            logger.warning(f"Discarding non-absolute cover URL for {game.title}: {image_url!r}")
            return None
        if not image_url:
            logger.info(f"No cover found for {game.title}")
        return image_url or None

    def _report(self, total: int, title: str) -> None:
        if not self.progress_cb:
            return
        try:
            self.progress_cb(self.processed, total, title)
        except Exception:
            logger.debug("Progress callback failed", exc_info=True)
