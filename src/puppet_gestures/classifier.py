"""
Rule-based gesture classification.

Rules are evaluated in order and the first match wins, so the list order is
the precedence between hand shapes that satisfy more than one rule.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .config import ThresholdsConfig
from .features import extract_features
from .types import FINGER_NAMES, FeatureSet, GestureLabel, Landmarks


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GestureRule:
    """A named predicate over features that yields a gesture label."""
    name: str
    label: GestureLabel
    matches: Callable[[FeatureSet], bool]


def two_finger_rule() -> GestureRule:
    """Index and middle up, ring and pinky down; the thumb may do anything."""
    def matches(f: FeatureSet) -> bool:
        return (f.is_extended("index") and f.is_extended("middle") and
                not f.is_extended("ring") and not f.is_extended("pinky"))
    return GestureRule(name="two_finger", label="rabbit", matches=matches)


def pinch_rule(thresholds: ThresholdsConfig) -> GestureRule:
    """Thumb tip close to index tip."""
    def matches(f: FeatureSet) -> bool:
        return f.thumb_index_distance < thresholds.pinch_distance
    return GestureRule(name="pinch", label="wolf", matches=matches)


def pointing_down_rule() -> GestureRule:
    """Middle fingertip hanging below the wrist."""
    def matches(f: FeatureSet) -> bool:
        return f.pointing_down
    return GestureRule(name="pointing_down", label="elephant", matches=matches)


def open_hand_rule(thresholds: ThresholdsConfig) -> GestureRule:
    """All five fingers extended and spread at least the configured amount."""
    def matches(f: FeatureSet) -> bool:
        return (all(f.is_extended(name) for name in FINGER_NAMES) and
                f.index_pinky_spread >= thresholds.open_hand_min_spread)
    return GestureRule(name="open_hand", label="butterfly", matches=matches)


def default_rules(thresholds: ThresholdsConfig) -> List[GestureRule]:
    """The standard rule order: rabbit, wolf, elephant, butterfly."""
    return [
        two_finger_rule(),
        pinch_rule(thresholds),
        pointing_down_rule(),
        open_hand_rule(thresholds),
    ]


class GestureClassifier:
    """Maps landmarks or features to a gesture label, or None."""

    def __init__(self, thresholds: ThresholdsConfig, rules: Optional[Sequence[GestureRule]] = None):
        """
        Initialize the classifier.

        Args:
            thresholds: Threshold values shared with feature extraction
            rules: Ordered rules to evaluate. Defaults to default_rules()
        """
        self.thresholds = thresholds
        self.rules: List[GestureRule] = list(rules) if rules is not None else default_rules(thresholds)

    def classify(self, features: FeatureSet) -> Optional[str]:
        """Return the label of the first matching rule, or None."""
        for rule in self.rules:
            if rule.matches(features):
                logger.debug(f"Rule '{rule.name}' matched -> {rule.label}")
                return rule.label
        return None

    def features(self, landmarks: Landmarks) -> FeatureSet:
        return extract_features(landmarks, self.thresholds)

    def classify_landmarks(self, landmarks: Landmarks) -> Optional[str]:
        """Extract features from landmarks and classify them."""
        return self.classify(self.features(landmarks))
