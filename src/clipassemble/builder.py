"""Command builder — turns a Configuration into one ffmpeg Command.

Dispatches over the closed set of composition methods:
  - Simple: demux-concat of a list file, stream copy.
  - Transition: trim every clip, then fold left to right with xfade.
  - SideBySide / Stacked: scale into a grid, hstack/vstack.

A Command is built in one go and is read-only afterwards. Its filter
graph is checked for dangling or duplicate pad labels on construction.
"""

import shlex
from dataclasses import dataclass, field
from pathlib import Path

from .config import Configuration
from .errors import InsufficientClipsError
from .filtergraph import FilterNode, check_graph, raw_input, render_graph
from .layout import GridLayout, grid_layout, side_by_side_nodes, stacked_nodes
from .methods import SideBySide, Simple, Stacked, Transition
from .timing import Timing


@dataclass(frozen=True)
class Command:
    inputs: tuple[str, ...]
    output_path: str
    encoding: dict
    filter_graph: tuple[FilterNode, ...] = ()
    final_label: str | None = None
    input_options: tuple[str, ...] = ()
    concat_list: str | None = None
    concat_entries: tuple[str, ...] = ()

    def __post_init__(self):
        if self.filter_graph:
            check_graph(self.filter_graph, len(self.inputs), self.final_label)

    def filter_text(self) -> str:
        return render_graph(self.filter_graph)

    def concat_text(self) -> str:
        """Contents of the concat list file (Simple method only)."""
        return "\n".join(f"file '{p}'" for p in self.concat_entries)

    def to_args(self, executable: str = "ffmpeg") -> list[str]:
        """Full argv for the ffmpeg invocation."""
        args = [executable, "-y", *self.input_options]
        for path in self.inputs:
            args.extend(["-i", path])
        if self.filter_graph:
            args.extend(["-filter_complex", self.filter_text()])
            args.extend(["-map", f"[{self.final_label}]"])
        for flag, value in self.encoding.items():
            args.append(flag)
            if value is not None:
                args.append(str(value))
        args.append(self.output_path)
        return args

    def to_text(self, executable: str = "ffmpeg") -> str:
        """Shell-quoted command line, as shown by --preview."""
        return shlex.join(self.to_args(executable))


@dataclass(frozen=True)
class BuildResult:
    command: Command
    layout: GridLayout | None = None
    cell_size: tuple[int, int] | None = None


def encoding_params(gpu: bool = False) -> dict:
    """Re-encode settings for filtered methods."""
    if gpu:
        quality = {"-c:v": "h264_nvenc", "-preset": "fast", "-cq": 20}
    else:
        quality = {"-c:v": "libx264", "-preset": "fast", "-crf": 20}
    return {**quality, "-pix_fmt": "yuv420p", "-an": None}


def concat_list_path(output_path: str) -> str:
    """List file sits next to the output: out.mp4 -> out.concat.txt."""
    out = Path(output_path)
    return str(out.with_name(f"{out.stem}.concat.txt"))


def _require_clips(config: Configuration, needed: int, what: str) -> None:
    if len(config.clips) < needed:
        raise InsufficientClipsError(
            f"{what} requires at least {needed} videos, got {len(config.clips)}"
        )


def build_simple(config: Configuration) -> BuildResult:
    _require_clips(config, 1, "Simple concatenation")
    list_path = concat_list_path(config.output_path)
    command = Command(
        inputs=(list_path,),
        output_path=config.output_path,
        encoding={"-c": "copy"},
        input_options=("-f", "concat", "-safe", "0"),
        concat_list=list_path,
        concat_entries=tuple(str(Path(c).resolve()) for c in config.clips),
    )
    return BuildResult(command)


def build_transition(config: Configuration, timing: Timing) -> BuildResult:
    """Trim each clip to [0, duration] and chain n-1 xfades.

    Each xfade combines the running result with the next trimmed clip:
    v0 + v1 -> xf1, xf1 + v2 -> xf2, ... and the last one writes 'v'.
    """
    _require_clips(config, 2, "Transitions")
    n = len(config.clips)
    kind = config.method.kind
    duration = timing.clip_duration
    offset = timing.offset

    nodes = [
        FilterNode("trim", (raw_input(i),), f"v{i}", {"start": 0, "end": duration})
        for i in range(n)
    ]

    current = "v0"
    for i in range(1, n):
        result = "v" if i == n - 1 else f"xf{i}"
        nodes.append(FilterNode(
            "xfade", (current, f"v{i}"), result,
            {
                "transition": kind,
                "duration": timing.transition_duration,
                "offset": offset,
            },
        ))
        current = result

    command = Command(
        inputs=config.clips,
        output_path=config.output_path,
        encoding=encoding_params(config.gpu),
        filter_graph=tuple(nodes),
        final_label=current,
    )
    return BuildResult(command)


def build_side_by_side(config: Configuration) -> BuildResult:
    _require_clips(config, 2, "Side-by-side")
    n = len(config.clips)
    layout = grid_layout(n)
    nodes, final = side_by_side_nodes(n, layout)
    command = Command(
        inputs=config.clips,
        output_path=config.output_path,
        encoding=encoding_params(config.gpu),
        filter_graph=tuple(nodes),
        final_label=final,
    )
    return BuildResult(command, layout=layout, cell_size=(layout.cell_width, layout.cell_height))


def build_stacked(config: Configuration) -> BuildResult:
    _require_clips(config, 2, "Stacked")
    nodes, final, cell_height = stacked_nodes(len(config.clips))
    command = Command(
        inputs=config.clips,
        output_path=config.output_path,
        encoding=encoding_params(config.gpu),
        filter_graph=tuple(nodes),
        final_label=final,
    )
    return BuildResult(command, cell_size=(nodes[0].params["w"], cell_height))


def build_command(config: Configuration, timing: Timing) -> BuildResult:
    """Build the Command for the configured method."""
    method = config.method
    if isinstance(method, Simple):
        return build_simple(config)
    if isinstance(method, Transition):
        return build_transition(config, timing)
    if isinstance(method, SideBySide):
        return build_side_by_side(config)
    if isinstance(method, Stacked):
        return build_stacked(config)
    raise TypeError(f"Unhandled composition method: {method!r}")
