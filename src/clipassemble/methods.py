"""Composition methods — the closed set of ways clips can be combined.

  - Simple: demux-concat with stream copy. Fast, no re-encoding.
  - Transition: xfade between consecutive clips, one of TRANSITION_KINDS.
  - SideBySide: every clip scaled into one cell of a 1920x1080 grid.
  - Stacked: every clip scaled to 640 wide and stacked vertically.

Methods are addressed on the command line by key (``--fade``). The key
registry carries the display name and description shown in --help.
"""

from dataclasses import dataclass

from .errors import UnknownMethodError


TRANSITION_KINDS = (
    "fade",
    "slideright",
    "slideleft",
    "slidedown",
    "slideup",
    "wipeleft",
    "wiperight",
    "dissolve",
)


@dataclass(frozen=True)
class Simple:
    key = "simple"
    min_clips = 1


@dataclass(frozen=True)
class Transition:
    kind: str
    min_clips = 2

    def __post_init__(self):
        if self.kind not in TRANSITION_KINDS:
            raise UnknownMethodError(
                f"Unknown transition kind '{self.kind}'. "
                f"Valid: {', '.join(TRANSITION_KINDS)}"
            )

    @property
    def key(self):
        return self.kind


@dataclass(frozen=True)
class SideBySide:
    key = "sidebyside"
    min_clips = 2


@dataclass(frozen=True)
class Stacked:
    key = "stacked"
    min_clips = 2


CompositionMethod = Simple | Transition | SideBySide | Stacked


@dataclass(frozen=True)
class MethodInfo:
    """Help-text metadata for one method key."""

    name: str
    description: str
    fast: bool = False


# Ordered as they appear in --help and in unknown-method errors.
METHOD_INFO = {
    "simple": MethodInfo(
        "Simple", "Direct concatenation, no re-encoding", fast=True,
    ),
    "fade": MethodInfo("Fade", "Smooth fade between clips"),
    "slideright": MethodInfo("Slide Right", "New clip slides in from the left"),
    "slideleft": MethodInfo("Slide Left", "New clip slides in from the right"),
    "slidedown": MethodInfo("Slide Down", "New clip slides down from the top"),
    "slideup": MethodInfo("Slide Up", "New clip slides up from the bottom"),
    "wipeleft": MethodInfo("Wipe Left", "Wipe reveals the new clip leftwards"),
    "wiperight": MethodInfo("Wipe Right", "Wipe reveals the new clip rightwards"),
    "dissolve": MethodInfo("Dissolve", "Pixel dissolve between clips"),
    "sidebyside": MethodInfo(
        "Side-by-Side", "All clips at once in a grid (any number of clips)",
    ),
    "stacked": MethodInfo(
        "Stacked", "All clips stacked vertically (any number of clips)",
    ),
}

METHOD_KEYS = tuple(METHOD_INFO)


def parse_method(key: str) -> CompositionMethod:
    """Turn a method key (with or without leading '--') into a method.

    Raises:
        UnknownMethodError: lists every valid key.
    """
    key = key.removeprefix("--")
    if key == "simple":
        return Simple()
    if key in TRANSITION_KINDS:
        return Transition(key)
    if key == "sidebyside":
        return SideBySide()
    if key == "stacked":
        return Stacked()
    raise UnknownMethodError(
        f"Unknown method: --{key}\n"
        "Available methods: " + ", ".join(f"--{k}" for k in METHOD_KEYS)
    )
