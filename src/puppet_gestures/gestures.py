"""
Per-frame gesture pipeline that turns hand observations into render commands.
"""
import logging
from dataclasses import replace
from typing import Iterable, Optional

from .classifier import GestureClassifier
from .config import Cfg
from .presentation import PuppetPresenter
from .stabilizer import GestureStabilizer
from .types import (
    FrameResult,
    HandObservation,
    HidePuppetCommand,
    PlayAnimationCommand,
    RenderCommand,
    RendererProto,
    ShowStaticCommand,
)


logger = logging.getLogger(__name__)


class GestureProcessor:
    """
    Main gesture processor that coordinates classification, debouncing and
    puppet presentation.

    Owns all rolling state; call process_frame() exactly once per camera frame.
    """

    def __init__(self, cfg: Cfg, classifier: Optional[GestureClassifier] = None):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg
        self.classifier = classifier or GestureClassifier(cfg.gestures.thresholds)
        self.stabilizer = GestureStabilizer(cfg.gestures.confirmation_frames)
        self.presenter = PuppetPresenter(cfg.puppets, cfg.gestures.hold_duration_ms)

    def process_frame(self, observation: Optional[HandObservation], t_now: float) -> FrameResult:
        """
        Process a frame and return the decisions made for it.

        Args:
            observation: First detected hand (None if no hand detected)
            t_now: Current timestamp in seconds

        Returns:
            FrameResult with raw and stabilized labels, puppet state and commands
        """
        features = None
        raw_label = None
        if observation is not None:
            features = self.classifier.features(observation.landmarks)
            raw_label = self.classifier.classify(features)

        stable_label = self.stabilizer.update(raw_label)
        commands = self.presenter.update(stable_label, t_now)

        if commands:
            logger.debug(f"raw={raw_label} stable={stable_label} commands={commands}")

        return FrameResult(
            raw_label=raw_label,
            stable_label=stable_label,
            state=replace(self.presenter.state),
            commands=commands,
            features=features
        )

    def reset(self) -> None:
        self.stabilizer.reset()
        self.presenter.reset()


async def apply_commands(renderer: RendererProto, commands: Iterable[RenderCommand]) -> None:
    """Execute render commands on a renderer in order."""
    for command in commands:
        if isinstance(command, ShowStaticCommand):
            await renderer.show_static(command.label, command.image)
        elif isinstance(command, PlayAnimationCommand):
            await renderer.play_animation(command.label, command.asset)
        elif isinstance(command, HidePuppetCommand):
            await renderer.hide_puppet()
        else:
            raise TypeError(f"Unknown render command: {command!r}")
