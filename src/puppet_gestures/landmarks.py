"""
Hand landmark detection using MediaPipe.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional

from .types import HandObservation, Landmarks


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, model_complexity: int = 1,
                 min_detection_conf: float = 0.7, min_tracking_conf: float = 0.7):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[HandObservation]:
        """
        Process a frame and return the first hand's landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            HandObservation with 21 (x, y) coordinates in [0..1] range,
            or None if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return None

        # Only the first hand drives the puppet
        hand_landmarks = results.multi_hand_landmarks[0]
        landmarks = [(landmark.x, landmark.y) for landmark in hand_landmarks.landmark]

        handedness = "Right"
        if results.multi_handedness:
            handedness = results.multi_handedness[0].classification[0].label

        return HandObservation(landmarks=landmarks, handedness=handedness)

    def close(self) -> None:
        self.hands.close()


def draw_landmarks(frame: np.ndarray, landmarks: Landmarks) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: List of (x, y) coordinates in [0..1] range

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for i, (x, y) in enumerate(landmarks):
        px = int(x * width)
        py = int(y * height)
        cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

    return frame
