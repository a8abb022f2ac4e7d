#!/usr/bin/env python3
"""
fuiframes: render a composition frame by frame and encode it with ffmpeg.

Examples:
  fuiframes --image ./photo.jpg
  fuiframes --image ./photo.jpg --preset zoom-in --duration 10
  fuiframes --composition KnowledgeGraph --duration 70 --output ./graph.mp4
  fuiframes --composition FuiPanorama --param panSpeed=0.8 --frames-dir ./frames

Frames are rasterized in-process (numpy + OpenCV) and streamed to ffmpeg as
raw BGR24 over stdin, or written as numbered PNGs with --frames-dir.
"""

from __future__ import annotations

import argparse
import contextlib
import math
import shutil
import subprocess
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import cv2
import numpy as np
from PIL import Image
from tqdm import tqdm

from .compositions.image_animator import REMOTE_PREFIXES
from .config import FrameContext, camel_to_snake, parse_param_value
from .engine import COMPOSITIONS, get_composition
from .errors import ConfigurationError, ExternalToolFailure, FuiFramesError
from .presets import PRESET_HELP, PRESETS, get_preset
from .raster import rasterize
from .util import format_cmd, format_eta, log


# ----------------------------
# Argument handling
# ----------------------------

def parse_params(items: Iterable[str]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"--param expects KEY=VALUE, got {item!r}")
        params[key.strip()] = parse_param_value(value)
    return params


def resolve_image_path(raw: str) -> Path:
    if raw.lower().startswith(REMOTE_PREFIXES):
        raise ConfigurationError(f"only local image files are supported, got {raw!r}")
    if raw.lower().startswith("file://"):
        return Path(url2pathname(urlparse(raw).path))
    return Path(raw).expanduser().resolve()


def load_image(path: Path) -> np.ndarray:
    if not path.is_file():
        raise ExternalToolFailure(f"Image file not found: {path}")
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise ExternalToolFailure(f"Could not decode image: {path}")
    return img


def preset_listing() -> str:
    width = max(len(name) for name in PRESETS)
    return "\n".join(f"  {name.ljust(width)}  {PRESET_HELP.get(name, '')}" for name in PRESETS)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="fuiframes",
        description="Render procedural FUI compositions and animated stills to video.",
        epilog="Available presets:\n" + preset_listing(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--image", default=None, help="Path to input image (required for ImageAnimator)")
    ap.add_argument("--output", default="./output.mp4", help="Output video path (default: ./output.mp4)")
    ap.add_argument("--preset", default="ken-burns", help="Animation preset (default: ken-burns)")
    ap.add_argument("--duration", type=float, default=5.0, help="Duration in seconds (default: 5)")
    ap.add_argument("--fps", type=int, default=30, help="Frames per second (default: 30)")

    ap.add_argument("--composition", default="ImageAnimator",
                    help=f"Composition to render ({', '.join(COMPOSITIONS)}; default: ImageAnimator)")
    ap.add_argument("--param", action="append", default=[], metavar="KEY=VALUE",
                    help="Composition parameter, snake_case or camelCase (repeatable)")
    ap.add_argument("--width", type=int, default=0, help="Frame width (0 = composition default)")
    ap.add_argument("--height", type=int, default=0, help="Frame height (0 = composition default)")
    ap.add_argument("--frames-dir", default=None, help="Write PNG frames here instead of encoding a video")

    ap.add_argument("--crf", type=int, default=18, help="x264 CRF (default: 18)")
    ap.add_argument("--ffpreset", default="medium", help="x264 encoder preset (default: medium)")
    ap.add_argument("--list-presets", action="store_true", help="List animation presets and exit")
    return ap


# ----------------------------
# Output sinks
# ----------------------------

def ffmpeg_command(output: Path, width: int, height: int, fps: int, crf: int, ffpreset: str) -> List[str]:
    return [
        "ffmpeg",
        "-hide_banner",
        "-loglevel", "error",
        "-y",
        "-f", "rawvideo",
        "-pix_fmt", "bgr24",
        "-s", f"{width}x{height}",
        "-r", f"{fps}",
        "-i", "pipe:0",
        "-an",
        "-c:v", "libx264",
        "-preset", ffpreset,
        "-crf", str(crf),
        "-pix_fmt", "yuv420p",
        str(output),
    ]


def encode_frames(frames: Iterable[np.ndarray], cmd: List[str], output: Optional[Path] = None) -> None:
    """Pipe frames into the encoder; on any failure the partial `output` is removed."""
    if shutil.which(cmd[0]) is None:
        raise ExternalToolFailure(f"{cmd[0]} not found on PATH")
    log(f"▶ {format_cmd(cmd)}")
    proc = subprocess.Popen(cmd, stdin=subprocess.PIPE)
    try:
        if proc.stdin is None:
            raise ExternalToolFailure("Encoder stdin is unavailable.")
        # a dead encoder shows up as a broken pipe here and as its exit code below
        try:
            with contextlib.suppress(BrokenPipeError):
                for frame in frames:
                    proc.stdin.write(frame.tobytes())
        finally:
            with contextlib.suppress(BrokenPipeError):
                proc.stdin.close()
    except BaseException:
        proc.kill()
        proc.wait()
        _discard(output)
        raise
    proc.wait()
    if proc.returncode != 0:
        _discard(output)
        raise ExternalToolFailure(f"Encoder failed (exit {proc.returncode}): {format_cmd(cmd)}")


def _discard(output: Optional[Path]) -> None:
    if output is not None and output.exists():
        log(f"removing partial output {output}")
        output.unlink()


def write_png_frames(frames: Iterable[np.ndarray], out_dir: Path) -> int:
    out_dir.mkdir(parents=True, exist_ok=True)
    n = 0
    for i, frame in enumerate(frames):
        Image.fromarray(frame[:, :, ::-1]).save(out_dir / f"frame_{i:05d}.png")
        n += 1
    return n


# ----------------------------
# Main
# ----------------------------

def run(args: argparse.Namespace) -> int:
    if args.list_presets:
        print(preset_listing())
        return 0

    comp = get_composition(args.composition)
    get_preset(args.preset)
    params = parse_params(args.param)

    images: Dict[str, np.ndarray] = {}
    if comp.id == "ImageAnimator":
        # an image_src parameter names the image to load in place of --image
        src_keys = [k for k in params if camel_to_snake(k) == "image_src"]
        raw = args.image
        for k in src_keys:
            raw = str(params.pop(k))
        if not raw:
            raise ConfigurationError("--image argument is required")
        if src_keys and args.image and raw != args.image:
            log(f"--param {src_keys[-1]} overrides --image {args.image}")
        image_path = resolve_image_path(raw)
        images[str(image_path)] = load_image(image_path)
        params["image_src"] = str(image_path)
        if "preset" not in {camel_to_snake(k) for k in params}:
            params["preset"] = args.preset
    elif args.image:
        log(f"--image is ignored by {comp.id}")

    if args.duration <= 0 or args.fps <= 0:
        raise ConfigurationError("--duration and --fps must be > 0")
    total_frames = int(math.floor(args.duration * args.fps + 0.5))
    if total_frames < 1:
        raise ConfigurationError(f"{args.duration}s at {args.fps} fps is less than one frame")

    ctx = FrameContext(
        frame_index=0,
        total_frames=total_frames,
        fps=args.fps,
        width=args.width or comp.width,
        height=args.height or comp.height,
    )
    config = comp.config(params)

    log(f"composition={comp.id} size={ctx.width}x{ctx.height} fps={ctx.fps} frames={total_frames}")
    if comp.id == "ImageAnimator":
        log(f"image={config.image_src} preset={config.preset}")

    t0 = time.time()

    def frames() -> Iterable[np.ndarray]:
        for i in tqdm(range(total_frames), desc=comp.id, unit="frame"):
            yield rasterize(comp.render(ctx.at(i), config), images)

    if args.frames_dir:
        out_dir = Path(args.frames_dir).expanduser()
        n = write_png_frames(frames(), out_dir)
        log(f"done={n} frames dir={out_dir} elapsed={format_eta(time.time() - t0)}")
        return 0

    output = Path(args.output).expanduser()
    output.parent.mkdir(parents=True, exist_ok=True)
    cmd = ffmpeg_command(output, ctx.width, ctx.height, args.fps, args.crf, args.ffpreset)
    encode_frames(frames(), cmd, output)
    log(f"done={output} elapsed={format_eta(time.time() - t0)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except FuiFramesError as e:
        log(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
