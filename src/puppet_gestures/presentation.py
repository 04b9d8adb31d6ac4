"""
Puppet presentation state machine: Idle -> Static -> Animating.
"""
import logging
from dataclasses import replace
from typing import Dict, List, Optional

from .config import ConfigError, validate_puppets
from .types import (
    HidePuppetCommand,
    Phase,
    PlayAnimationCommand,
    PuppetAsset,
    PuppetState,
    RenderCommand,
    ShowStaticCommand,
)


logger = logging.getLogger(__name__)


class PuppetPresenter:
    """
    Converts the confirmed gesture into render commands.

    Features:
    - Static puppet shown as soon as a gesture is confirmed
    - Animation played once per hold episode after hold_duration_ms
    - Switching gestures restarts the hold timer
    - Puppet hidden immediately when the gesture drops
    """

    def __init__(self, puppets: Dict[str, PuppetAsset], hold_duration_ms: int = 2000):
        """
        Initialize the presenter.

        Args:
            puppets: Gesture label -> asset table, must cover every gesture
            hold_duration_ms: Hold time before the animation plays

        Raises:
            ConfigError: If the asset table is incomplete
        """
        validate_puppets(puppets)
        self.puppets = dict(puppets)
        self.hold_duration_s = hold_duration_ms / 1000.0
        self.state = PuppetState()
        self._started = False

    def update(self, stable_label: Optional[str], t_now: float) -> List[RenderCommand]:
        """
        Advance the state machine by one frame.

        Args:
            stable_label: Confirmed gesture, or None
            t_now: Current timestamp in seconds

        Returns:
            Render commands to execute for this frame, in order
        """
        commands: List[RenderCommand] = []

        if stable_label is None:
            if self.state.phase is not Phase.IDLE or not self._started:
                if self.state.label is not None:
                    logger.info(f"Hiding puppet '{self.state.label}'")
                self.state = PuppetState()
                commands.append(HidePuppetCommand())
            self._started = True
            return commands

        self._started = True
        asset = self._asset_for(stable_label)

        if stable_label != self.state.label:
            logger.info(f"Showing puppet '{stable_label}'")
            self.state = PuppetState(
                label=stable_label,
                phase=Phase.STATIC,
                phase_entered_at=t_now,
                animation_played=False
            )
            commands.append(ShowStaticCommand(label=stable_label, image=asset.image))
            return commands

        if self.state.phase is Phase.STATIC and not self.state.animation_played:
            held_s = t_now - self.state.phase_entered_at
            if held_s >= self.hold_duration_s:
                logger.info(f"Puppet '{stable_label}' held {held_s:.2f}s, playing animation")
                self.state = replace(self.state, phase=Phase.ANIMATING, animation_played=True)
                commands.append(PlayAnimationCommand(label=stable_label, asset=asset))

        return commands

    def reset(self) -> None:
        self.state = PuppetState()
        self._started = False

    def _asset_for(self, label: str) -> PuppetAsset:
        try:
            return self.puppets[label]
        except KeyError:
            raise ConfigError(f"No puppet asset configured for gesture '{label}'") from None
