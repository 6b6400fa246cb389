#!/usr/bin/env python3
"""Generate synthetic clips for trying out clipassemble.

Creates 7 clips with varying durations in examples/demo-clips/. Each
clip is a solid color with its number drawn large in the middle, so
clip order and grid placement are obvious in the assembled output.
Durations are short enough to trigger transition auto-adjustment.

Usage:
    pip install clipassemble[demo]
    python examples/generate_demo_clips.py
    # Then assemble:
    clipassemble --manifest examples/demo-assembly.yaml --preview
    clipassemble --sidebyside examples/demo-clips/*.mp4 --output grid.mp4
"""

import numpy as np
from moviepy import ImageClip
from pathlib import Path
from PIL import Image, ImageDraw, ImageFont

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-clips"
SIZE = (640, 360)
FPS = 30

# Seven clips: enough for a 3x3 side-by-side grid with two filler cells.
CLIPS = [
    ("clip-01", (180, 60, 60),   4.0),  # red
    ("clip-02", (60, 60, 180),   5.0),  # blue
    ("clip-03", (60, 160, 60),   4.5),  # green
    ("clip-04", (200, 130, 40),  6.0),  # orange
    ("clip-05", (130, 60, 180),  3.5),  # purple
    ("clip-06", (40, 170, 170),  5.5),  # cyan
    ("clip-07", (200, 200, 50),  4.0),  # yellow
]


def _make_frame(number: int, bg_color: tuple[int, int, int]) -> np.ndarray:
    """Solid background with the clip number centered in white."""
    img = Image.new("RGB", SIZE, bg_color)
    draw = ImageDraw.Draw(img)
    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 160
        )
    except OSError:
        font = ImageFont.load_default()
    text = str(number)
    bbox = draw.textbbox((0, 0), text, font=font)
    tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
    draw.text(
        ((SIZE[0] - tw) / 2, (SIZE[1] - th) / 2),
        text,
        fill=(255, 255, 255),
        font=font,
    )
    return np.array(img)


def main():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    for number, (name, color, duration) in enumerate(CLIPS, start=1):
        out = OUTPUT_DIR / f"{name}.mp4"
        if out.exists():
            print(f"  skip {name} (exists)")
            continue

        clip = ImageClip(_make_frame(number, color), duration=duration)
        clip.write_videofile(str(out), fps=FPS, logger=None)
        print(f"  wrote {name} ({duration}s)")

    print(f"\nDone. {len(CLIPS)} clips in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
