"""coverresolver package root.

Expose the pieces needed to resolve covers programmatically. Keep this file
small and explicit to make `import coverresolver` lightweight.
"""

from . import config
from .common.models import BatchResult, GameItem
from .metadata_providers import create_provider
from .orchestrator import BatchOrchestrator, BatchState

__all__ = [
    "BatchOrchestrator",
    "BatchResult",
    "BatchState",
    "GameItem",
    "config",
    "create_provider",
]
