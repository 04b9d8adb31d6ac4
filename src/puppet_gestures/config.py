"""
Configuration management for the puppet gesture system.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from .types import GESTURE_LABELS, PuppetAsset


EFFECT_NAMES = ("bob", "flutter", "hop", "sway")


class ConfigError(ValueError):
    """Raised when the configuration cannot drive the puppet show."""


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class ThresholdsConfig:
    """Geometric thresholds used by feature extraction and classification."""
    extension_leniency: float
    pinch_distance: float
    pointing_down_margin: float
    open_hand_min_spread: float


@dataclass
class GesturesConfig:
    """Gesture recognition and presentation timing configuration."""
    confirmation_frames: int
    hold_duration_ms: int
    thresholds: ThresholdsConfig


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    window_name: str
    show_landmarks: bool
    show_hints: bool
    mirror: bool
    puppet_scale: float


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    puppets: Dict[str, PuppetAsset]
    display: DisplayConfig
    logging: LoggingConfig


def default_config_path() -> Path:
    """Location of the config.default.yaml shipped inside the package."""
    return Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load and validate configuration from a YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: If the config file does not exist
        ConfigError: If the file is incomplete or inconsistent
    """
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} does not contain a mapping")

    try:
        cfg = _dict_to_config(data)
    except KeyError as e:
        raise ConfigError(f"Missing config key: {e}") from e

    validate_config(cfg)
    return cfg


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data.get('model_complexity', 1),
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gestures_data = data['gestures']
    thresholds_data = gestures_data['thresholds']
    thresholds = ThresholdsConfig(
        extension_leniency=thresholds_data['extension_leniency'],
        pinch_distance=thresholds_data['pinch_distance'],
        pointing_down_margin=thresholds_data['pointing_down_margin'],
        open_hand_min_spread=thresholds_data.get('open_hand_min_spread', 0.0)
    )
    gestures = GesturesConfig(
        confirmation_frames=gestures_data['confirmation_frames'],
        hold_duration_ms=gestures_data['hold_duration_ms'],
        thresholds=thresholds
    )

    puppets = {
        label: _dict_to_asset(label, asset_data)
        for label, asset_data in (data['puppets'] or {}).items()
    }

    display_data = data['display']
    display = DisplayConfig(
        window_name=display_data['window_name'],
        show_landmarks=display_data['show_landmarks'],
        show_hints=display_data.get('show_hints', False),
        mirror=display_data.get('mirror', True),
        puppet_scale=display_data.get('puppet_scale', 0.45)
    )

    logging_data = data.get('logging') or {}
    logging_cfg = LoggingConfig(level=logging_data.get('level', 'INFO'))

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        puppets=puppets,
        display=display,
        logging=logging_cfg
    )


def _dict_to_asset(label: str, asset_data: Any) -> PuppetAsset:
    if not isinstance(asset_data, dict):
        raise ConfigError(f"Puppet entry for '{label}' must be a mapping")
    return PuppetAsset(
        image=asset_data.get('image'),
        video=asset_data.get('video'),
        effect=asset_data.get('effect')
    )


def validate_puppets(puppets: Dict[str, PuppetAsset]) -> None:
    """
    Check that the gesture-to-asset table covers every gesture exactly once.

    Raises:
        ConfigError: On a missing, unknown or malformed entry
    """
    missing = [label for label in GESTURE_LABELS if label not in puppets]
    if missing:
        raise ConfigError(f"No puppet asset configured for: {', '.join(missing)}")

    unknown = [label for label in puppets if label not in GESTURE_LABELS]
    if unknown:
        raise ConfigError(f"Puppet assets configured for unknown gestures: {', '.join(unknown)}")

    for label, asset in puppets.items():
        if not asset.image:
            raise ConfigError(f"Puppet '{label}' has no static image")
        if (asset.video is None) == (asset.effect is None):
            raise ConfigError(
                f"Puppet '{label}' needs exactly one animation trigger (video or effect)"
            )
        if asset.effect is not None and asset.effect not in EFFECT_NAMES:
            raise ConfigError(f"Puppet '{label}' uses unknown effect '{asset.effect}'")


def _is_number(value) -> bool:
    # YAML booleans load as bool, which is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(cfg: Cfg) -> None:
    """
    Validate a configuration before any frame is processed.

    Raises:
        ConfigError: If the configuration is unusable
    """
    gestures = cfg.gestures
    frames = gestures.confirmation_frames
    if isinstance(frames, bool) or not isinstance(frames, int) or frames < 1:
        raise ConfigError("gestures.confirmation_frames must be an integer >= 1")
    if not _is_number(gestures.hold_duration_ms) or gestures.hold_duration_ms < 0:
        raise ConfigError("gestures.hold_duration_ms must be a non-negative number")

    t = gestures.thresholds
    for name in ('extension_leniency', 'pinch_distance', 'pointing_down_margin', 'open_hand_min_spread'):
        value = getattr(t, name)
        if not _is_number(value) or value < 0:
            raise ConfigError(f"gestures.thresholds.{name} must be a non-negative number, got {value!r}")

    validate_puppets(cfg.puppets)
