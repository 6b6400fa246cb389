"""Duration adjustment for transition methods.

Requested clip durations default to 10s, which is longer than many
captured clips. When the user didn't pass --duration, the clip duration
is pulled down to fit the shortest probed clip, and the transition is
clamped so at least one second of each clip plays before the cross-fade.
"""

import math
from dataclasses import dataclass

from .config import Configuration
from .methods import Transition
from .probe import ClipInfo


# Floor for the auto-detected clip duration, in seconds.
MIN_AUTO_DURATION = 2
# Floor for a clamped transition, in seconds.
MIN_TRANSITION = 0.5


@dataclass(frozen=True)
class Timing:
    """Effective clip/transition durations after adjustment."""

    clip_duration: float
    transition_duration: float
    min_duration: float | None = None
    adjusted_clip: bool = False
    adjusted_transition: bool = False

    @property
    def offset(self) -> float:
        """Timeline offset at which each xfade starts."""
        return max(0, self.clip_duration - self.transition_duration)


def adjust_durations(config: Configuration, clips: list[ClipInfo]) -> Timing:
    """Reconcile requested durations against probed clip durations.

    Algorithm:
      1. Keep only clips whose duration probed successfully.
      2. If none did, keep the requested values unchanged.
      3. auto = max(2, floor(min duration) - 1).
      4. If auto is below the requested clip duration, use auto.
      5. If the transition exceeds clip duration - 1, clamp it to
         max(0.5, clip duration - 1).

    Non-transition methods and user-set durations pass through untouched.
    """
    duration = config.clip_duration
    transition = config.transition_duration
    unchanged = Timing(duration, transition)

    if not isinstance(config.method, Transition) or config.user_set_duration:
        return unchanged

    durations = [c.duration for c in clips if c.duration is not None]
    if not durations:
        return unchanged

    min_duration = min(durations)
    auto = max(MIN_AUTO_DURATION, math.floor(min_duration) - 1)

    adjusted_clip = auto < duration
    if adjusted_clip:
        duration = auto

    adjusted_transition = transition > duration - 1
    if adjusted_transition:
        transition = max(MIN_TRANSITION, duration - 1)

    return Timing(
        clip_duration=duration,
        transition_duration=transition,
        min_duration=min_duration,
        adjusted_clip=adjusted_clip,
        adjusted_transition=adjusted_transition,
    )
