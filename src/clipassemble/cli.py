"""CLI for clip assembly — combine videos with one composition method.

The method is always the first argument; the remaining arguments are
clip paths (in order) and options.

Usage:
    # Simple concat (fastest, no re-encoding)
    clipassemble --simple static.mp4 rotation.mp4 spiral.mp4

    # Fade transitions, 5s per clip, 2s transitions
    clipassemble --fade static.mp4 rotation.mp4 \
        --output my_video.mp4 --duration 5 --transition 2

    # Show the ffmpeg command without running it
    clipassemble --slideright video1.mp4 video2.mp4 --preview

    # Grid comparison / vertical stack
    clipassemble --sidebyside video1.mp4 video2.mp4 video3.mp4
    clipassemble --stacked video1.mp4 video2.mp4

    # Everything from a YAML assembly manifest
    clipassemble --manifest assembly.yaml --preview

Exit status is 0 on success or --help, 1 on any failure.
"""

import argparse
import sys

from .config import (
    DEFAULT_CLIP_DURATION,
    DEFAULT_OUTPUT,
    DEFAULT_TRANSITION_DURATION,
    Configuration,
    load_assembly_manifest,
)
from .errors import AssemblyError, UnknownMethodError
from .methods import METHOD_INFO, parse_method
from .planner import CompositionPlanner
from .probe import probe_clip, validate_videos


PROG = "clipassemble"


class _ArgumentParser(argparse.ArgumentParser):
    """argparse with exit status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def help_text() -> str:
    lines = [
        "clipassemble — combine video clips with transitions or grid layouts",
        "",
        "USAGE:",
        f"  {PROG} METHOD VIDEO [VIDEO ...] [OPTIONS]",
        f"  {PROG} --manifest assembly.yaml [--preview] [--validate]",
        "",
        "METHODS:",
    ]
    for key, info in METHOD_INFO.items():
        fast = "  (fast, no re-encoding)" if info.fast else ""
        lines.append(f"  --{key:<14} {info.name}: {info.description}{fast}")
    lines += [
        "",
        "OPTIONS:",
        f"  --output PATH      Output file (default: {DEFAULT_OUTPUT})",
        f"  --duration SECS    Clip duration before transition "
        f"(default: {DEFAULT_CLIP_DURATION:g}, auto-fit to short clips)",
        f"  --transition SECS  Transition duration (default: {DEFAULT_TRANSITION_DURATION:g})",
        "  --preview          Print the ffmpeg command without running it",
        "  --validate         Probe the clips and list them, don't render",
        "  --gpu              Encode with h264_nvenc instead of libx264",
        "  -h, --help         Show this help",
    ]
    return "\n".join(lines)


def _options_parser() -> _ArgumentParser:
    parser = _ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("clips", nargs="*")
    parser.add_argument("--output", default=DEFAULT_OUTPUT)
    parser.add_argument("--duration", type=int, default=None)
    parser.add_argument("--transition", type=int, default=int(DEFAULT_TRANSITION_DURATION))
    parser.add_argument("--preview", action="store_true")
    parser.add_argument("--validate", action="store_true")
    parser.add_argument("--gpu", action="store_true")
    return parser


def _manifest_parser() -> _ArgumentParser:
    parser = _ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("--manifest", required=True)
    parser.add_argument("--preview", action="store_true")
    parser.add_argument("--validate", action="store_true")
    return parser


def parse_args(argv) -> tuple[Configuration, bool]:
    """Build a Configuration from CLI tokens.

    Returns:
        (config, validate_only).

    Raises:
        UnknownMethodError: First token isn't a known method.
        ManifestError: Invalid --manifest file.
    """
    first = argv[0]

    if first == "--manifest":
        parsed = _manifest_parser().parse_args(argv)
        config = load_assembly_manifest(parsed.manifest, preview=parsed.preview)
        return config, parsed.validate

    if not first.startswith("--"):
        raise UnknownMethodError(
            "First argument must be a method (--simple, --fade, etc)\n"
            "Available methods: " + ", ".join(f"--{k}" for k in METHOD_INFO) + "\n"
            f"Run: {PROG} --help"
        )
    method = parse_method(first)

    parsed = _options_parser().parse_intermixed_args(argv[1:])
    config = Configuration(
        method=method,
        clips=tuple(parsed.clips),
        output_path=parsed.output,
        clip_duration=float(
            parsed.duration if parsed.duration is not None else DEFAULT_CLIP_DURATION
        ),
        transition_duration=float(parsed.transition),
        preview=parsed.preview,
        user_set_duration=parsed.duration is not None,
        gpu=parsed.gpu,
    )
    return config, parsed.validate


def validate(config: Configuration, probe=None) -> None:
    """--validate: probe every clip and list what was found."""
    probe = probe or probe_clip
    config.check_clip_count()
    clips = validate_videos(config.clips, probe)
    print(f"All {len(clips)} videos found:")
    for i, clip in enumerate(clips):
        dur = f"{clip.duration:.1f}s" if clip.duration is not None else "unknown duration"
        print(f"  {i}: {clip.path} -> {clip.width}x{clip.height} @{clip.frame_rate}fps, {dur}")


def main(args=None) -> int:
    argv = sys.argv[1:] if args is None else list(args)

    if not argv or "--help" in argv or "-h" in argv:
        print(help_text())
        return 0

    try:
        config, validate_only = parse_args(argv)
        if validate_only:
            validate(config)
            return 0
        CompositionPlanner().run(config)
    except (AssemblyError, OSError) as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
