"""Tests for Command construction per composition method."""

from pathlib import Path

import pytest

from clipassemble.builder import (
    Command,
    build_command,
    concat_list_path,
    encoding_params,
)
from clipassemble.config import Configuration
from clipassemble.errors import FilterGraphError, InsufficientClipsError
from clipassemble.filtergraph import FilterNode
from clipassemble.methods import SideBySide, Simple, Stacked, Transition
from clipassemble.timing import Timing


def _transition_command(n, kind="fade", duration=10, transition=1):
    config = Configuration(
        method=Transition(kind),
        clips=[f"clip{i}.mp4" for i in range(n)],
    )
    return build_command(config, Timing(duration, transition)).command


class TestTransitionBuild:
    @pytest.mark.parametrize("n", [2, 3, 4, 7, 12])
    def test_node_counts(self, n):
        command = _transition_command(n)
        ops = [node.operation for node in command.filter_graph]
        assert ops.count("trim") == n
        assert ops.count("xfade") == n - 1

    @pytest.mark.parametrize("n", [2, 3, 5, 11])
    def test_fold_chains_left_to_right(self, n):
        command = _transition_command(n)
        xfades = [node for node in command.filter_graph if node.operation == "xfade"]
        current = "v0"
        for k, node in enumerate(xfades, start=1):
            assert node.inputs == (current, f"v{k}")
            current = node.output
        assert xfades[-1].output == command.final_label == "v"

    def test_two_clips_text(self):
        command = _transition_command(2, kind="wipeleft", duration=5, transition=2)
        assert command.filter_text() == (
            "[0:v]trim=start=0:end=5[v0];"
            "[1:v]trim=start=0:end=5[v1];"
            "[v0][v1]xfade=transition=wipeleft:duration=2:offset=3[v]"
        )

    def test_three_clips_intermediate_label(self):
        command = _transition_command(3)
        xfades = [node for node in command.filter_graph if node.operation == "xfade"]
        assert [x.output for x in xfades] == ["xf1", "v"]

    def test_same_offset_for_every_xfade(self):
        command = _transition_command(4, duration=2, transition=0.5)
        offsets = {
            node.params["offset"]
            for node in command.filter_graph if node.operation == "xfade"
        }
        assert offsets == {1.5}

    def test_args_map_final_label_and_reencode(self):
        args = _transition_command(2).to_args()
        assert args[:6] == ["ffmpeg", "-y", "-i", "clip0.mp4", "-i", "clip1.mp4"]
        assert args[args.index("-map") + 1] == "[v]"
        assert args[args.index("-c:v") + 1] == "libx264"
        assert "copy" not in args
        assert args[-1] == "assembled.mp4"

    def test_one_clip_raises(self):
        config = Configuration(method=Transition("fade"), clips=["a.mp4"])
        with pytest.raises(InsufficientClipsError):
            build_command(config, Timing(10, 1))


class TestSimpleBuild:
    def test_concat_entries_absolute_in_order(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        root = tmp_path.resolve()
        config = Configuration(method=Simple(), clips=["a.mp4", "b.mp4"])
        command = build_command(config, Timing(10, 1)).command
        assert command.concat_text() == (
            f"file '{root / 'a.mp4'}'\nfile '{root / 'b.mp4'}'"
        )

    def test_stream_copy_from_list_file(self):
        config = Configuration(
            method=Simple(), clips=["a.mp4"], output_path="out/final.mp4",
        )
        command = build_command(config, Timing(10, 1)).command
        assert command.to_args() == [
            "ffmpeg", "-y", "-f", "concat", "-safe", "0",
            "-i", "out/final.concat.txt",
            "-c", "copy",
            "out/final.mp4",
        ]
        assert command.filter_graph == ()


class TestGridBuild:
    def test_side_by_side_reports_layout(self):
        config = Configuration(method=SideBySide(), clips=["a", "b", "c", "d", "e"])
        result = build_command(config, Timing(10, 1))
        assert (result.layout.cols, result.layout.rows) == (3, 2)
        assert result.command.final_label == "v"

    def test_side_by_side_single_row_maps_row0(self):
        config = Configuration(method=SideBySide(), clips=["a", "b"])
        args = build_command(config, Timing(10, 1)).command.to_args()
        assert args[args.index("-map") + 1] == "[row0]"

    def test_stacked_cell_size(self):
        config = Configuration(method=Stacked(), clips=["a", "b", "c"])
        result = build_command(config, Timing(10, 1))
        assert result.cell_size == (640, 360)

    @pytest.mark.parametrize("method", [SideBySide(), Stacked()])
    def test_grid_needs_two_clips(self, method):
        config = Configuration(method=method, clips=["a"])
        with pytest.raises(InsufficientClipsError):
            build_command(config, Timing(10, 1))


class TestCommand:
    def test_dangling_label_rejected(self):
        with pytest.raises(FilterGraphError):
            Command(
                inputs=("a.mp4",),
                output_path="out.mp4",
                encoding={},
                filter_graph=(FilterNode("scale", ("missing",), "v"),),
                final_label="v",
            )

    def test_to_text_quotes_paths(self):
        config = Configuration(
            method=Stacked(), clips=["my clip.mp4", "b.mp4"], output_path="o.mp4",
        )
        text = build_command(config, Timing(10, 1)).command.to_text()
        assert "'my clip.mp4'" in text
        assert "'[v]'" in text

    def test_gpu_encoding(self):
        params = encoding_params(gpu=True)
        assert params["-c:v"] == "h264_nvenc"
        assert "-crf" not in params

    def test_concat_list_path_next_to_output(self):
        assert concat_list_path("renders/final.mp4") == str(
            Path("renders") / "final.concat.txt"
        )
