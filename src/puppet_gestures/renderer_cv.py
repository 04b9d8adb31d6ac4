"""
OpenCV renderer that composites the puppet into the camera window.
"""
import logging
import math
from pathlib import Path
from typing import Dict, Optional, Tuple

import cv2
import numpy as np

from .types import PuppetAsset


logger = logging.getLogger(__name__)


HINTS = (
    ("rabbit", "Index + middle up"),
    ("wolf", "Pinch thumb and index"),
    ("elephant", "Point fingers down"),
    ("butterfly", "Open hand"),
)

PLACEHOLDER_COLORS = {
    "wolf": (160, 160, 160),
    "butterfly": (200, 120, 255),
    "rabbit": (240, 240, 240),
    "elephant": (150, 130, 110),
}


def ensure_bgra(image: np.ndarray) -> np.ndarray:
    """Return the image with an alpha channel."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
    return image


def placeholder_sprite(label: str, size: int = 256) -> np.ndarray:
    """Draw a stand-in puppet when the image file is missing."""
    sprite = np.zeros((size, size, 4), dtype=np.uint8)
    color = PLACEHOLDER_COLORS.get(label, (255, 255, 255))
    center = (size // 2, size // 2)
    cv2.circle(sprite, center, size // 2 - 4, color + (255,), -1)
    cv2.putText(sprite, label, (16, size // 2 + 8), cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 0, 0, 255), 2)
    return sprite


def overlay_image(frame: np.ndarray, sprite: np.ndarray, x: int, y: int) -> np.ndarray:
    """
    Alpha-blend a BGRA sprite onto a BGR frame in place.

    Args:
        frame: Destination frame (BGR)
        sprite: Source image (BGRA)
        x, y: Top-left position of the sprite, may be partly off-frame

    Returns:
        The frame
    """
    fh, fw = frame.shape[:2]
    sh, sw = sprite.shape[:2]
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + sw, fw), min(y + sh, fh)
    if x0 >= x1 or y0 >= y1:
        return frame

    crop = sprite[y0 - y:y1 - y, x0 - x:x1 - x]
    alpha = crop[:, :, 3:4].astype(np.float32) / 255.0
    region = frame[y0:y1, x0:x1].astype(np.float32)
    blended = alpha * crop[:, :, :3].astype(np.float32) + (1.0 - alpha) * region
    frame[y0:y1, x0:x1] = blended.astype(np.uint8)
    return frame


def apply_effect(sprite: np.ndarray, effect: str, elapsed_s: float) -> Tuple[np.ndarray, int, int]:
    """
    Animate a still sprite.

    Args:
        sprite: BGRA image
        effect: One of bob, flutter, hop, sway
        elapsed_s: Time since the animation started

    Returns:
        (sprite, dx, dy) - transformed sprite and its offset from the rest position
    """
    h, w = sprite.shape[:2]

    if effect == "bob":
        dy = int(math.sin(2 * math.pi * elapsed_s / 1.2) * 0.08 * h)
        return sprite, 0, dy

    if effect == "hop":
        dy = -int(abs(math.sin(math.pi * elapsed_s / 0.6)) * 0.15 * h)
        return sprite, 0, dy

    if effect == "sway":
        angle = 10.0 * math.sin(2 * math.pi * elapsed_s / 1.5)
        matrix = cv2.getRotationMatrix2D((w / 2, h), angle, 1.0)
        rotated = cv2.warpAffine(sprite, matrix, (w, h), borderMode=cv2.BORDER_CONSTANT, borderValue=(0, 0, 0, 0))
        return rotated, 0, 0

    if effect == "flutter":
        factor = 0.6 + 0.4 * abs(math.cos(2 * math.pi * elapsed_s / 0.5))
        new_w = max(1, int(w * factor))
        squeezed = cv2.resize(sprite, (new_w, h), interpolation=cv2.INTER_LINEAR)
        return squeezed, (w - new_w) // 2, 0

    return sprite, 0, 0


def draw_hints(frame: np.ndarray) -> np.ndarray:
    """Draw the gesture cheat sheet in the top-right corner."""
    fh, fw = frame.shape[:2]
    x = fw - 330
    cv2.rectangle(frame, (x - 10, 10), (fw - 10, 30 + 28 * len(HINTS)), (40, 40, 40), -1)
    for i, (label, hint) in enumerate(HINTS):
        cv2.putText(frame, f"{hint}: {label}", (x, 36 + 28 * i), cv2.FONT_HERSHEY_SIMPLEX, 0.55, (255, 255, 255), 1)
    return frame


class OpenCVPuppetRenderer:
    """Renders the puppet in the bottom-right of the camera frame."""

    def __init__(self, base_dir: Optional[Path] = None, scale: float = 0.45):
        """
        Initialize the renderer.

        Args:
            base_dir: Directory relative asset paths are resolved against
            scale: Puppet height as a fraction of the frame height
        """
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.scale = scale
        self.label: Optional[str] = None
        self.mode: Optional[str] = None  # "static", "effect" or "video"
        self.effect: Optional[str] = None
        self.animation_started_at: Optional[float] = None
        self._sprite: Optional[np.ndarray] = None
        self._video: Optional[cv2.VideoCapture] = None
        self._cache: Dict[str, np.ndarray] = {}

    async def show_static(self, label: str, image: str) -> None:
        self._release_video()
        self.label = label
        self._sprite = self._load_image(label, image)
        self.mode = "static"
        self.effect = None
        self.animation_started_at = None

    async def play_animation(self, label: str, asset: PuppetAsset) -> None:
        self._release_video()
        self.label = label
        self._sprite = self._load_image(label, asset.image)
        self.animation_started_at = None

        if asset.video:
            video_path = self._resolve(asset.video)
            capture = cv2.VideoCapture(str(video_path))
            if capture.isOpened():
                self._video = capture
                self.mode = "video"
                return
            capture.release()
            logger.warning(f"Could not open animation video {video_path}, keeping still image")
            self.mode = "static"
            return

        self.mode = "effect"
        self.effect = asset.effect

    async def hide_puppet(self) -> None:
        self._release_video()
        self.label = None
        self.mode = None
        self.effect = None
        self._sprite = None
        self.animation_started_at = None

    def compose(self, frame: np.ndarray, t_now: float) -> np.ndarray:
        """Draw the current puppet onto the frame."""
        if self.mode is None or self._sprite is None:
            return frame

        sprite, dx, dy = self._sprite, 0, 0
        if self.mode == "video":
            video_frame = self._next_video_frame()
            if video_frame is not None:
                sprite = ensure_bgra(video_frame)
        elif self.mode == "effect":
            if self.animation_started_at is None:
                self.animation_started_at = t_now
            sprite, dx, dy = apply_effect(sprite, self.effect, t_now - self.animation_started_at)

        fh, fw = frame.shape[:2]
        sprite = self._fit(sprite, fh)
        x = fw - sprite.shape[1] - 20 + dx
        y = fh - sprite.shape[0] - 20 + dy
        return overlay_image(frame, sprite, x, y)

    def close(self) -> None:
        self._release_video()

    def _fit(self, sprite: np.ndarray, frame_height: int) -> np.ndarray:
        target_h = max(1, int(frame_height * self.scale))
        h, w = sprite.shape[:2]
        if h == target_h:
            return sprite
        target_w = max(1, int(w * target_h / h))
        return cv2.resize(sprite, (target_w, target_h), interpolation=cv2.INTER_AREA)

    def _next_video_frame(self) -> Optional[np.ndarray]:
        ret, video_frame = self._video.read()
        if not ret:
            # Loop the clip
            self._video.set(cv2.CAP_PROP_POS_FRAMES, 0)
            ret, video_frame = self._video.read()
        return video_frame if ret else None

    def _release_video(self) -> None:
        if self._video is not None:
            self._video.release()
            self._video = None

    def _resolve(self, reference: str) -> Path:
        path = Path(reference)
        return path if path.is_absolute() else self.base_dir / path

    def _load_image(self, label: str, reference: str) -> np.ndarray:
        if reference in self._cache:
            return self._cache[reference]

        path = self._resolve(reference)
        image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if image is None:
            logger.warning(f"Puppet image {path} not found, drawing placeholder for '{label}'")
            sprite = placeholder_sprite(label)
        else:
            sprite = ensure_bgra(image)

        self._cache[reference] = sprite
        return sprite
