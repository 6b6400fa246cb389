"""Grid layouts for multi-clip compositions.

Side-by-side layout (n=5 shown):
  ┌────────┬────────┬────────┐
  │  v0    │  v1    │  v2    │  ← row0 = hstack(v0, v1, v2)
  ├────────┼────────┼────────┤
  │  v3    │  v4    │ fill   │  ← row1 = hstack(v3, v4, fill1_2)
  └────────┴────────┴────────┘
                                 v = vstack(row0, row1)

Stacked layout scales every clip to 640 wide and stacks them in input
order, so it never needs filler cells.
"""

import math
from dataclasses import dataclass

from .filtergraph import FilterNode, raw_input


GRID_WIDTH = 1920
GRID_HEIGHT = 1080
STACK_WIDTH = 640
STACK_HEIGHT = 1080
FILLER_COLOR = "black"

# Counts where the square-root rule gives a poor aspect ratio.
_GRID_OVERRIDES = {
    3: (3, 1),
    5: (3, 2),
}


@dataclass(frozen=True)
class GridLayout:
    cols: int
    rows: int
    cell_width: int
    cell_height: int

    @property
    def cells(self) -> int:
        return self.cols * self.rows


def grid_layout(
    num_clips: int,
    width: int = GRID_WIDTH,
    height: int = GRID_HEIGHT,
) -> GridLayout:
    """Pick cols/rows for ``num_clips`` and the cell size on the canvas.

    cols = ceil(sqrt(n)), rows = ceil(n / cols), except n=3 → 3x1 and
    n=5 → 3x2. Other counts keep the square-root rule even where a
    tighter packing exists (n=7 gives 3x3 with two filler cells).
    """
    if num_clips in _GRID_OVERRIDES:
        cols, rows = _GRID_OVERRIDES[num_clips]
    else:
        cols = math.ceil(math.sqrt(num_clips))
        rows = math.ceil(num_clips / cols)
    return GridLayout(cols, rows, width // cols, height // rows)


def _scale_nodes(num_clips, cell_width, cell_height):
    return [
        FilterNode("scale", (raw_input(i),), f"v{i}", {"w": cell_width, "h": cell_height})
        for i in range(num_clips)
    ]


def side_by_side_nodes(num_clips: int, layout: GridLayout):
    """Build the grid filter graph.

    Returns:
        (nodes, final_label). A single-row grid ends at row0; otherwise
        the rows are vstacked into 'v'.
    """
    w, h = layout.cell_width, layout.cell_height
    nodes = _scale_nodes(num_clips, w, h)

    row_labels = []
    for row in range(layout.rows):
        cells = []
        for col in range(layout.cols):
            index = row * layout.cols + col
            if index < num_clips:
                cells.append(f"v{index}")
            else:
                filler = f"fill{row}_{col}"
                nodes.append(FilterNode(
                    "color", (), filler, {"c": FILLER_COLOR, "s": f"{w}x{h}"},
                ))
                cells.append(filler)
        label = f"row{row}"
        params = {"inputs": layout.cols}
        if len(cells) > num_clips - row * layout.cols:
            # color sources never end on their own.
            params["shortest"] = 1
        nodes.append(FilterNode("hstack", tuple(cells), label, params))
        row_labels.append(label)

    if layout.rows == 1:
        return nodes, row_labels[0]

    nodes.append(FilterNode("vstack", tuple(row_labels), "v", {"inputs": layout.rows}))
    return nodes, "v"


def stacked_nodes(
    num_clips: int,
    width: int = STACK_WIDTH,
    height: int = STACK_HEIGHT,
):
    """Scale every clip to width x floor(height/n) and vstack in order.

    Returns:
        (nodes, final_label, cell_height).
    """
    cell_height = height // num_clips
    nodes = _scale_nodes(num_clips, width, cell_height)
    labels = tuple(f"v{i}" for i in range(num_clips))
    nodes.append(FilterNode("vstack", labels, "v", {"inputs": num_clips}))
    return nodes, "v", cell_height
