"""Structured ffmpeg filter graphs.

A graph is an ordered list of FilterNode. Each node consumes pad labels
(raw inputs like "0:v", or outputs of earlier nodes) and produces one
new label. Text is only produced at the very end:

    [0:v][1:v]xfade=transition=fade:duration=1:offset=9[v]

Nodes are joined with ';'. check_graph enforces that every input label
is defined before use and no output label is defined twice.
"""

import re
from dataclasses import dataclass, field

from .errors import FilterGraphError


_RAW_INPUT = re.compile(r"^(\d+):v$")


@dataclass(frozen=True)
class FilterNode:
    operation: str
    inputs: tuple[str, ...]
    output: str
    params: dict = field(default_factory=dict)

    def to_text(self) -> str:
        ins = "".join(f"[{label}]" for label in self.inputs)
        args = ":".join(f"{k}={format_value(v)}" for k, v in self.params.items())
        body = f"{self.operation}={args}" if args else self.operation
        return f"{ins}{body}[{self.output}]"


def raw_input(index: int) -> str:
    """Pad label of the video stream of input file ``index``."""
    return f"{index}:v"


def format_value(value) -> str:
    """Render a filter parameter. Whole floats print without a decimal."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:g}"
    return str(value)


def render_graph(nodes) -> str:
    """Serialize nodes into a -filter_complex argument."""
    return ";".join(node.to_text() for node in nodes)


def check_graph(nodes, num_inputs: int, final_label: str) -> None:
    """Verify pad labels: no dangling references, no duplicate outputs.

    Raises:
        FilterGraphError: On the first broken reference, naming the node.
    """
    defined = set()
    for i, node in enumerate(nodes):
        for label in node.inputs:
            m = _RAW_INPUT.match(label)
            if m:
                if int(m.group(1)) >= num_inputs:
                    raise FilterGraphError(
                        f"Node {i} ({node.operation}) reads input [{label}] "
                        f"but only {num_inputs} inputs exist"
                    )
            elif label not in defined:
                raise FilterGraphError(
                    f"Node {i} ({node.operation}) reads undefined pad [{label}]"
                )
        if node.output in defined or _RAW_INPUT.match(node.output):
            raise FilterGraphError(
                f"Node {i} ({node.operation}) redefines pad [{node.output}]"
            )
        defined.add(node.output)

    if final_label not in defined:
        raise FilterGraphError(f"Final pad [{final_label}] is never produced")
