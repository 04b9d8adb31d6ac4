"""
Synthetic 21-point hands for exercising the classifier without a camera.

The hand is upright: wrist at the bottom, fingers pointing up the frame.
"""
from typing import Dict, Iterable, Optional, Tuple

from puppet_gestures.config import Cfg, CameraConfig, DisplayConfig, GesturesConfig, LoggingConfig, MediaPipeConfig, ThresholdsConfig
from puppet_gestures.types import HandObservation, Landmarks, PuppetAsset


WRIST_Y = 0.8
MCP_Y = 0.6
PIP_Y = 0.5
DIP_Y = 0.45
TIP_UP_Y = 0.38
TIP_DOWN_Y = 0.55

# finger -> (first landmark index, x position)
FINGER_COLUMNS = {
    "index": (5, 0.45),
    "middle": (9, 0.50),
    "ring": (13, 0.55),
    "pinky": (17, 0.60),
}


def make_hand(extended: Iterable[str] = (), overrides: Optional[Dict[int, Tuple[float, float]]] = None) -> Landmarks:
    """
    Build landmarks with the named fingers extended and the rest folded.

    Args:
        extended: Finger names to extend (thumb, index, middle, ring, pinky)
        overrides: Landmark index -> (x, y) replacements applied last
    """
    extended = set(extended)
    points = [(0.5, 0.5)] * 21
    points[0] = (0.5, WRIST_Y)

    # thumb: CMC, MCP, IP, tip
    points[1] = (0.42, 0.72)
    points[2] = (0.38, 0.65)
    points[3] = (0.36, 0.58)
    points[4] = (0.33, 0.50) if "thumb" in extended else (0.40, 0.66)

    for finger, (base, x) in FINGER_COLUMNS.items():
        points[base] = (x, MCP_Y)
        points[base + 1] = (x, PIP_Y)
        points[base + 2] = (x, DIP_Y if finger in extended else 0.53)
        points[base + 3] = (x, TIP_UP_Y if finger in extended else TIP_DOWN_Y)

    for idx, point in (overrides or {}).items():
        points[idx] = point

    return points


def observe(landmarks: Landmarks, handedness: str = "Right") -> HandObservation:
    return HandObservation(landmarks=landmarks, handedness=handedness)


def make_thresholds(**kwargs) -> ThresholdsConfig:
    values = dict(
        extension_leniency=0.02,
        pinch_distance=0.05,
        pointing_down_margin=0.1,
        open_hand_min_spread=0.0,
    )
    values.update(kwargs)
    return ThresholdsConfig(**values)


def make_puppets() -> Dict[str, PuppetAsset]:
    return {
        "wolf": PuppetAsset(image="assets/wolf.png", effect="sway"),
        "butterfly": PuppetAsset(image="assets/butterfly.png", effect="flutter"),
        "rabbit": PuppetAsset(image="assets/rabbit.png", video="assets/rabbit_move.mp4"),
        "elephant": PuppetAsset(image="assets/elephant.png", effect="bob"),
    }


def make_config(confirmation_frames: int = 3, hold_duration_ms: int = 2000, **threshold_kwargs) -> Cfg:
    """In-memory configuration for pipeline tests."""
    return Cfg(
        camera=CameraConfig(index=0, width=640, height=480, fps=30),
        mediapipe=MediaPipeConfig(max_num_hands=1, model_complexity=1,
                                  min_detection_confidence=0.7, min_tracking_confidence=0.7),
        gestures=GesturesConfig(
            confirmation_frames=confirmation_frames,
            hold_duration_ms=hold_duration_ms,
            thresholds=make_thresholds(**threshold_kwargs),
        ),
        puppets=make_puppets(),
        display=DisplayConfig(window_name="test", show_landmarks=False, show_hints=False,
                              mirror=True, puppet_scale=0.45),
        logging=LoggingConfig(level="INFO"),
    )


# Canonical shapes
RABBIT = make_hand(extended=("index", "middle"))
OPEN_HAND = make_hand(extended=("thumb", "index", "middle", "ring", "pinky"))
FIST = make_hand()
PINCH = make_hand(extended=("ring", "pinky"), overrides={4: (0.45, 0.56)})
POINTING_DOWN = make_hand(overrides={12: (0.50, 0.95)})
