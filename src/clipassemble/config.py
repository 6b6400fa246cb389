"""Assembly configuration and the YAML manifest loader.

A Configuration is built once per invocation (from CLI flags or from a
manifest) and threaded through every stage unchanged.

Assembly manifest schema:
  method: fade               # any key from methods.METHOD_KEYS
  output: final.mp4          # optional, default assembled.mp4
  duration: 5                # optional; setting it disables auto-adjust
  transition: 1              # optional, default 1
  gpu: false                 # optional, encode with h264_nvenc
  paths:
    renders: "/path/to/renders"
  clips:
    - "${renders}/static.mp4"
    - "${renders}/rotation.mp4"
"""

import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import InsufficientClipsError, ManifestError
from .methods import CompositionMethod, parse_method


DEFAULT_OUTPUT = "assembled.mp4"
DEFAULT_CLIP_DURATION = 10.0
DEFAULT_TRANSITION_DURATION = 1.0


@dataclass(frozen=True)
class Configuration:
    method: CompositionMethod
    clips: tuple[str, ...]
    output_path: str = DEFAULT_OUTPUT
    clip_duration: float = DEFAULT_CLIP_DURATION
    transition_duration: float = DEFAULT_TRANSITION_DURATION
    preview: bool = False
    user_set_duration: bool = False
    gpu: bool = False

    def __post_init__(self):
        # Accept any sequence of paths but store an immutable tuple.
        object.__setattr__(self, "clips", tuple(str(c) for c in self.clips))

    def check_clip_count(self) -> None:
        """Raise InsufficientClipsError if the method needs more clips."""
        if not self.clips:
            raise InsufficientClipsError("No video files specified")
        needed = self.method.min_clips
        if len(self.clips) < needed:
            raise InsufficientClipsError(
                f"--{self.method.key} needs at least {needed} videos, "
                f"got {len(self.clips)}"
            )


def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ManifestError(f"Unknown path variable: ${{{key}}}")
        return paths[key]
    return re.sub(r"\$\{(\w+)\}", _replace, text)


def _number(raw: dict, key: str, default: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ManifestError(
            f"Assembly manifest: {key} must be a number >= 0, got {value!r}"
        )
    return float(value)


def load_assembly_manifest(
    manifest_path: str | Path,
    preview: bool = False,
) -> Configuration:
    """Load and validate a YAML assembly manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Resolve the method key.
      3. Resolve ${path} variables in each clip path.
      4. Read optional output, duration, transition and gpu settings.

    A ``duration`` key counts as a user-set duration, exactly like the
    --duration flag.

    Raises:
        ManifestError: Missing/invalid fields.
        UnknownMethodError: Unrecognized method key.
    """
    with open(manifest_path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ManifestError(f"Assembly manifest: invalid YAML ({e})") from e

    if not isinstance(raw, dict):
        raise ManifestError("Assembly manifest: expected a mapping at top level")
    if "method" not in raw:
        raise ManifestError("Assembly manifest: missing required 'method' field")
    if "clips" not in raw:
        raise ManifestError("Assembly manifest: missing required 'clips' field")

    method = parse_method(str(raw["method"]))

    paths = raw.get("paths") or {}
    if not isinstance(paths, dict):
        raise ManifestError(
            f"Assembly manifest: 'paths' must be a mapping, got {paths!r}"
        )
    if not isinstance(raw["clips"], list) or not raw["clips"]:
        raise ManifestError(
            f"Assembly manifest: 'clips' must be a non-empty list, got {raw['clips']!r}"
        )

    clips = []
    for i, clip in enumerate(raw["clips"]):
        if not isinstance(clip, str):
            raise ManifestError(f"Assembly clip {i}: path must be a string, got {clip!r}")
        clips.append(resolve_path_vars(clip, paths))

    return Configuration(
        method=method,
        clips=tuple(clips),
        output_path=str(raw.get("output", DEFAULT_OUTPUT)),
        clip_duration=_number(raw, "duration", DEFAULT_CLIP_DURATION),
        transition_duration=_number(raw, "transition", DEFAULT_TRANSITION_DURATION),
        preview=preview,
        user_set_duration="duration" in raw,
        gpu=bool(raw.get("gpu", False)),
    )
