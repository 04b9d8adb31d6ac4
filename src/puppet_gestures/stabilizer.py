"""
Temporal debouncing of per-frame gesture labels.
"""
import logging
from typing import Optional


logger = logging.getLogger(__name__)


class GestureStabilizer:
    """
    Turns noisy per-frame labels into a confirmed gesture.

    Debounce is asymmetric on purpose: a new gesture has to be seen for
    `confirmation_frames` consecutive frames before it is confirmed, but a
    frame with no gesture clears the confirmed value at once so the puppet
    disappears as soon as the hand does.
    """

    def __init__(self, confirmation_frames: int = 3):
        if confirmation_frames < 1:
            raise ValueError("confirmation_frames must be >= 1")
        self.confirmation_frames = confirmation_frames
        self.last_raw: Optional[str] = None
        self.consecutive_count = 0
        self.stable: Optional[str] = None

    def update(self, raw_label: Optional[str]) -> Optional[str]:
        """
        Feed the classifier output for one frame.

        Args:
            raw_label: Label from the classifier, or None

        Returns:
            The confirmed gesture after this frame, or None
        """
        if raw_label is None:
            if self.stable is not None:
                logger.debug(f"Gesture '{self.stable}' dropped")
            self.reset()
            return None

        if raw_label != self.last_raw:
            self.last_raw = raw_label
            self.consecutive_count = 1
        else:
            self.consecutive_count += 1

        if self.consecutive_count >= self.confirmation_frames and self.stable != raw_label:
            logger.debug(f"Gesture '{raw_label}' confirmed after {self.consecutive_count} frames")
            self.stable = raw_label

        return self.stable

    def reset(self) -> None:
        """Forget all rolling state."""
        self.last_raw = None
        self.consecutive_count = 0
        self.stable = None
