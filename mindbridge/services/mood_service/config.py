"""Mood pattern thresholds and suggestion copy."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MoodThresholds:
    """Thresholds for mood pattern classification.

    Variability is the population standard deviation of ratings; trend is
    the recent-window mean minus the overall mean.
    """
    min_samples: int = 5
    recent_window: int = 5
    high_variability_above: float = 1.2
    low_variability_below: float = 0.5
    improving_above: float = 0.5
    declining_below: float = -0.5
    low_average_below: float = 2.5


INSUFFICIENT_DATA_PATTERN = "insufficient_data"
HIGH_VARIABILITY_PATTERN = "high_variability"
LOW_VARIABILITY_PATTERN = "low_variability"
IMPROVING_SUFFIX = "_improving"
DECLINING_SUFFIX = "_declining"
STABLE_SUFFIX = "_stable"

INSUFFICIENT_DATA_SUGGESTION = (
    "Continue tracking your mood daily to receive personalized insights."
)

HIGH_VARIABILITY_SUGGESTIONS: Tuple[str, ...] = (
    "Your mood shows significant fluctuations. Consider tracking factors "
    "that might influence these changes.",
    "Mindfulness practices might help stabilize mood fluctuations.",
    "Discuss these mood patterns with your therapist to identify potential "
    "triggers.",
)

LOW_VARIABILITY_SUGGESTIONS: Tuple[str, ...] = (
    "Your mood appears relatively stable. This can be positive if you're "
    "feeling good consistently.",
    "If you're consistently feeling low, consider discussing this with your "
    "therapist.",
    "Try new activities that bring joy and note their impact on your mood.",
)

IMPROVING_SUGGESTION = (
    "Your mood appears to be improving recently. Reflect on positive changes "
    "you've made."
)
DECLINING_SUGGESTION = (
    "Your mood appears to be declining recently. Consider discussing this "
    "with your therapist."
)
STABLE_SUGGESTION = "Your mood has been relatively consistent recently."

LOW_AVERAGE_SUGGESTION = (
    "Your average mood is on the lower side. Consider scheduling a session "
    "with your therapist to discuss this."
)
