"""
Mock renderer implementation for testing puppet commands.
"""
import logging
from typing import List, Optional, Tuple

from .types import PuppetAsset


logger = logging.getLogger(__name__)


class MockRenderer:
    """Mock renderer that logs puppet commands instead of drawing them."""

    def __init__(self):
        """Initialize the mock renderer."""
        self.calls: List[Tuple[str, Optional[str]]] = []
        self.visible_label: Optional[str] = None
        self.animating = False

    async def show_static(self, label: str, image: str) -> None:
        """Record a show-static command."""
        self.calls.append(("show_static", label))
        self.visible_label = label
        self.animating = False
        logger.info(f"[MockRenderer] Show static: {label} ({image}) (call #{len(self.calls)})")

    async def play_animation(self, label: str, asset: PuppetAsset) -> None:
        """Record a play-animation command."""
        self.calls.append(("play_animation", label))
        self.visible_label = label
        self.animating = True
        trigger = asset.video or f"effect:{asset.effect}"
        logger.info(f"[MockRenderer] Play animation: {label} ({trigger}) (call #{len(self.calls)})")

    async def hide_puppet(self) -> None:
        """Record a hide command."""
        self.calls.append(("hide_puppet", None))
        self.visible_label = None
        self.animating = False
        logger.info(f"[MockRenderer] Hide puppet (call #{len(self.calls)})")
