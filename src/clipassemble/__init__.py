"""clipassemble — stitch independently rendered clips into one video.

Plans an ffmpeg command for one of several composition methods (hard
concatenation, xfade transitions, side-by-side and stacked grids) and
either prints it or runs it. ffmpeg does all decoding and encoding.
"""
