"""
Geometric features computed from 21 normalized hand landmarks.

Assumes an upright hand facing the camera: a smaller y is higher on screen.
"""
import math
from typing import Tuple

from .config import ThresholdsConfig
from .types import FINGER_NAMES, FeatureSet, Landmarks


WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_TIP = 12
PINKY_TIP = 20

# finger -> (tip, middle joint); the thumb uses its IP joint
FINGER_JOINTS = {
    "thumb": (4, 3),
    "index": (8, 6),
    "middle": (12, 10),
    "ring": (16, 14),
    "pinky": (20, 18),
}


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Euclidean distance between two normalized (x, y) points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def finger_extended(landmarks: Landmarks, finger: str, leniency: float = 0.0) -> bool:
    """
    Check whether a finger is extended.

    Args:
        landmarks: List of 21 hand landmarks
        finger: One of thumb, index, middle, ring, pinky
        leniency: Margin added to the joint height to absorb landmark jitter

    Returns:
        True if the tip sits above the middle joint (within the leniency margin)
    """
    tip, joint = FINGER_JOINTS[finger]
    return landmarks[tip][1] < landmarks[joint][1] + leniency


def is_pointing_down(landmarks: Landmarks, margin: float) -> bool:
    """True when the middle fingertip hangs more than `margin` below the wrist."""
    return landmarks[MIDDLE_TIP][1] - landmarks[WRIST][1] > margin


def extract_features(landmarks: Landmarks, thresholds: ThresholdsConfig) -> FeatureSet:
    """
    Derive the feature set the classifier rules need.

    Args:
        landmarks: List of 21 hand landmarks
        thresholds: Leniency and pointing-down margin

    Returns:
        FeatureSet for this frame
    """
    fingers = {
        name: finger_extended(landmarks, name, thresholds.extension_leniency)
        for name in FINGER_NAMES
    }
    return FeatureSet(
        fingers=fingers,
        thumb_index_distance=distance(landmarks[THUMB_TIP], landmarks[INDEX_TIP]),
        index_pinky_spread=distance(landmarks[INDEX_TIP], landmarks[PINKY_TIP]),
        middle_tip_drop=landmarks[MIDDLE_TIP][1] - landmarks[WRIST][1],
        pointing_down=is_pointing_down(landmarks, thresholds.pointing_down_margin),
    )
