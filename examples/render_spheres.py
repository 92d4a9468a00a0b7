#!/usr/bin/env python3
"""Render the sphere demo scene.

This script renders one of the demo sphere scenes end to end: it builds the
scene, sets up the thin-lens camera, renders the image on a pool of worker
threads and writes the result as a PPM (P3) or PNG file.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH           Image width in pixels (default: 500)
    --aspect-ratio RATIO    Image width / height (default: 16/9)
    --samples SAMPLES       Number of samples per pixel (default: 50)
    --depth DEPTH           Maximum bounces per path (default: 30)
    --workers WORKERS       Number of render threads (default: 6)
    --seed SEED             Seed for a reproducible image
    --scene {demo,glass}    Scene to render (default: demo)
    --output OUTPUT         Output file, .ppm or .png; "-" writes PPM to stdout
                            (default: spheres.ppm)
    --quiet                 Suppress progress output
    --verbose               Enable debug logging

Example:
    python -m examples.render_spheres --width 200 --samples 10 --output out.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from contextlib import closing
from pathlib import Path
from typing import TextIO

DEFAULT_OUTPUT = "spheres.ppm"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    from pathtracer.core.integrator import MAX_DEPTH
    from pathtracer.core.settings import DEFAULT_SAMPLES, DEFAULT_WORKERS
    from pathtracer.scene.demo import DEFAULT_ASPECT_RATIO, SCENES

    parser = argparse.ArgumentParser(
        description="Render a sphere scene with the CPU path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=500,
        help="Image width in pixels (default: 500)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=DEFAULT_ASPECT_RATIO,
        help="Image width divided by height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Number of samples per pixel (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Maximum bounces per path (default: {MAX_DEPTH})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Number of render threads (default: {DEFAULT_WORKERS})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for a reproducible image (default: random)",
    )
    parser.add_argument(
        "--scene",
        choices=sorted(SCENES),
        default="demo",
        help="Scene to render (default: demo)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f'Output file, .ppm or .png; "-" writes PPM to stdout (default: {DEFAULT_OUTPUT})',
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = 500,
    aspect_ratio: float = 16.0 / 9.0,
    num_samples: int = 50,
    max_depth: int = 30,
    workers: int = 6,
    seed: int | None = None,
    scene_name: str = "demo",
    output_path: str = DEFAULT_OUTPUT,
    quiet: bool = False,
) -> Path | None:
    """Render a demo scene and save it.

    Args:
        width: Image width in pixels.
        aspect_ratio: Image width divided by height.
        num_samples: Number of samples per pixel.
        max_depth: Maximum bounces per path.
        workers: Number of render threads.
        seed: Optional seed for a reproducible image.
        scene_name: Key of the scene in SCENES.
        output_path: Output file path (.ppm or .png), or "-" for stdout.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file, or None when writing to stdout.
    """
    from pathtracer.camera.thin_lens import setup_camera
    from pathtracer.core.parallel import render_pixels
    from pathtracer.core.settings import RenderSettings
    from pathtracer.output.export import save_png
    from pathtracer.output.ppm import PpmWriter, write_ppm
    from pathtracer.scene.demo import SCENES, DemoSceneParams

    # Status messages must not end up inside a PPM written to stdout
    to_stdout = output_path == "-"
    status: TextIO = sys.stderr if to_stdout else sys.stdout

    settings = RenderSettings.from_aspect_ratio(
        width,
        aspect_ratio,
        samples_per_pixel=num_samples,
        max_depth=max_depth,
        workers=workers,
        seed=seed,
    )

    if not quiet:
        print(f"Creating {scene_name} scene ({settings.width}x{settings.height})...", file=status)

    scene, camera_config = SCENES[scene_name](DemoSceneParams(aspect_ratio=aspect_ratio))
    camera = setup_camera(camera_config)

    if not quiet:
        print(f"Rendering {num_samples} samples per pixel on {workers} threads...", file=status)

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / total) * 100 if total > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{total} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                file=status,
                flush=True,
            )

    output_file: Path | None
    # A failing sink closes the render so the workers stop immediately
    with closing(render_pixels(scene, camera, settings, callback=progress_callback)) as pixels:
        if to_stdout:
            writer = PpmWriter(sys.stdout, settings.width, settings.height, settings.max_color)
            writer.write_pixels(pixels)
            output_file = None
        elif Path(output_path).suffix.lower() == ".png":
            output_file = save_png(
                pixels,
                output_path,
                settings.width,
                settings.height,
                max_color=settings.max_color,
            )
        else:
            output_file = write_ppm(
                output_path,
                pixels,
                settings.width,
                settings.height,
                settings.max_color,
            )

    total_time = time.time() - start_time
    if not quiet:
        print(file=status)  # Newline after progress
        if output_file is not None:
            print(f"Saved to: {output_file.absolute()}", file=status)
        print(f"Total time: {total_time:.2f}s", file=status)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(threadName)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        render_spheres(
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            num_samples=args.samples,
            max_depth=args.depth,
            workers=args.workers,
            seed=args.seed,
            scene_name=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
