"""
Type definitions for the puppet gesture system.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional, Protocol, Tuple, Union, get_args, runtime_checkable


Landmarks = List[Tuple[float, float]]

GestureLabel = Literal["wolf", "butterfly", "rabbit", "elephant"]

# Every label the classifier can produce; the asset table must cover all of them
GESTURE_LABELS: Tuple[str, ...] = get_args(GestureLabel)

FINGER_NAMES: Tuple[str, ...] = ("thumb", "index", "middle", "ring", "pinky")


@dataclass(frozen=True)
class HandObservation:
    """One hand as reported by the landmark provider for a single frame."""
    landmarks: Landmarks  # 21 (x, y) points in [0..1]
    handedness: Literal["Left", "Right"]


@dataclass(frozen=True)
class FeatureSet:
    """Geometric features derived from one set of hand landmarks."""
    fingers: Dict[str, bool]
    thumb_index_distance: float
    index_pinky_spread: float
    middle_tip_drop: float  # middle tip y minus wrist y, positive means below the wrist
    pointing_down: bool

    def is_extended(self, finger: str) -> bool:
        return self.fingers.get(finger, False)

    @property
    def extended_count(self) -> int:
        return sum(1 for name in FINGER_NAMES if self.is_extended(name))


class Phase(Enum):
    """Presentation phase of the puppet."""
    IDLE = "idle"
    STATIC = "static"
    ANIMATING = "animating"


@dataclass
class PuppetState:
    """Current state of the puppet presentation."""
    label: Optional[GestureLabel] = None
    phase: Phase = Phase.IDLE
    phase_entered_at: Optional[float] = None  # seconds
    animation_played: bool = False


@dataclass(frozen=True)
class PuppetAsset:
    """Static image plus exactly one animation trigger for a gesture."""
    image: str
    video: Optional[str] = None  # looping clip played when the hold completes
    effect: Optional[str] = None  # procedural animation applied to the still image


@dataclass(frozen=True)
class ShowStaticCommand:
    """Command to show the still puppet for a gesture."""
    label: GestureLabel
    image: str


@dataclass(frozen=True)
class PlayAnimationCommand:
    """Command to play the puppet's signature animation."""
    label: GestureLabel
    asset: PuppetAsset


@dataclass(frozen=True)
class HidePuppetCommand:
    """Command to hide whatever puppet is on screen."""


RenderCommand = Union[ShowStaticCommand, PlayAnimationCommand, HidePuppetCommand]


@dataclass
class FrameResult:
    """Everything the pipeline decided for one frame."""
    raw_label: Optional[GestureLabel]
    stable_label: Optional[GestureLabel]
    state: PuppetState
    commands: List[RenderCommand] = field(default_factory=list)
    features: Optional[FeatureSet] = None


@runtime_checkable
class RendererProto(Protocol):
    """Abstract protocol for display layers that execute render commands."""

    async def show_static(self, label: str, image: str) -> None:
        """Show the still puppet image for a gesture."""
        ...

    async def play_animation(self, label: str, asset: PuppetAsset) -> None:
        """Start the puppet's animation for a gesture."""
        ...

    async def hide_puppet(self) -> None:
        """Hide the puppet."""
        ...
