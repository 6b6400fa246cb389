"""Composition planner — the Validate → Probe → Adjust → Build pipeline.

Stages run strictly in order and never loop back:

  VALIDATING  clip count fits the method (no probing yet)
  PROBING     every clip probed in input order; all missing ones reported
  PLANNING    durations adjusted (transitions only), Command built
  PREVIEWING  command printed, nothing executed, concat list kept
  EXECUTING   ffmpeg run once; concat list removed on success
  DONE

Any exception moves the planner to FAILED and propagates unchanged.
Probe and execute are injected so the pure planning logic can run
against fakes.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .builder import BuildResult, Command, build_command
from .config import Configuration
from .errors import ExternalToolError
from .methods import METHOD_INFO, SideBySide, Stacked, Transition
from .probe import ClipInfo, probe_clip, validate_videos
from .runner import run_ffmpeg
from .timing import Timing, adjust_durations


class Stage(Enum):
    VALIDATING = "validating"
    PROBING = "probing"
    PLANNING = "planning"
    PREVIEWING = "previewing"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Plan:
    config: Configuration
    clips: tuple[ClipInfo, ...]
    timing: Timing
    build: BuildResult

    @property
    def command(self) -> Command:
        return self.build.command


def _secs(value: float) -> str:
    return f"{value:g}s"


class CompositionPlanner:
    def __init__(self, probe=None, execute=None, echo=print):
        self.probe = probe or probe_clip
        self.execute = execute or run_ffmpeg
        self.echo = echo
        self.stage = None

    def plan(self, config: Configuration) -> Plan:
        """Validate, probe and build. No files written, nothing executed."""
        try:
            return self._plan(config)
        except Exception:
            self.stage = Stage.FAILED
            raise

    def run(self, config: Configuration) -> Plan:
        """Plan, then either print the command or run it."""
        plan = self.plan(config)
        try:
            self._emit(plan)
        except Exception:
            self.stage = Stage.FAILED
            raise
        self.stage = Stage.DONE
        return plan

    # ── Stages ────────────────────────────────────────────────────

    def _plan(self, config):
        self.stage = Stage.VALIDATING
        config.check_clip_count()
        info = METHOD_INFO[config.method.key]
        self.echo(f"Method: --{config.method.key} ({info.name})")
        self.echo(f"Input videos: {len(config.clips)}")
        for i, path in enumerate(config.clips):
            self.echo(f"  {i + 1}. {path}")
        self.echo(f"Output: {config.output_path}")
        if info.fast:
            self.echo("This method is fast (no re-encoding)")

        self.stage = Stage.PROBING
        self.echo(f"\nProbing {len(config.clips)} videos...")
        clips = validate_videos(config.clips, self.probe)
        for i, clip in enumerate(clips):
            dur = f"{clip.duration:.1f}s" if clip.duration is not None else "?s"
            self.echo(
                f"  [{i}] {dur:>7}  {clip.width}x{clip.height}"
                f" @{clip.frame_rate}fps  {clip.path}"
            )

        self.stage = Stage.PLANNING
        timing = adjust_durations(config, clips)
        if timing.adjusted_clip:
            self.echo(f"\nAuto-detected video duration: ~{timing.min_duration:.1f}s")
            self.echo(
                f"Adjusting clip duration from {_secs(config.clip_duration)} "
                f"to {_secs(timing.clip_duration)}"
            )
        if timing.adjusted_transition:
            self.echo(
                f"Adjusting transition from {_secs(config.transition_duration)} "
                f"to {_secs(timing.transition_duration)}"
            )

        build = build_command(config, timing)
        return Plan(config=config, clips=tuple(clips), timing=timing, build=build)

    def _emit(self, plan):
        command = plan.command
        if command.concat_list:
            list_path = Path(command.concat_list)
            list_path.parent.mkdir(parents=True, exist_ok=True)
            list_path.write_text(command.concat_text())

        if plan.config.preview:
            self.stage = Stage.PREVIEWING
            self.echo("\nFFmpeg command:\n")
            self.echo(command.to_text())
            self.echo("\n(run without --preview to execute)")
            return

        self.stage = Stage.EXECUTING
        Path(command.output_path).parent.mkdir(parents=True, exist_ok=True)
        self.echo("\nProcessing...\n")
        result = self.execute(command)
        if not result.success:
            raise ExternalToolError(result.error_message or "ffmpeg failed")

        if command.concat_list:
            Path(command.concat_list).unlink(missing_ok=True)
        self._report(plan)

    def _report(self, plan):
        method = plan.config.method
        self.echo(f"\nDone: {plan.command.output_path}")
        if isinstance(method, Transition):
            self.echo(
                f"Transition: {method.kind} ({_secs(plan.timing.transition_duration)})"
            )
            self.echo(f"Clip duration: {_secs(plan.timing.clip_duration)}")
        elif isinstance(method, SideBySide):
            layout = plan.build.layout
            self.echo(
                f"Layout: side-by-side grid "
                f"({layout.cols}x{layout.rows} = {len(plan.clips)} videos)"
            )
            self.echo(f"  Resolution: {layout.cell_width}x{layout.cell_height} per video")
        elif isinstance(method, Stacked):
            w, h = plan.build.cell_size
            self.echo(f"Layout: stacked vertical ({len(plan.clips)} videos, {w}x{h} each)")
