"""
Command-line entry point.

Loads image files and decomposes each into channels for the requested
colour models, writing one ``<stem>-<model>.webp`` mosaic per model.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence, TextIO

from chromasplit import __version__
from chromasplit.config import (
    Crop,
    DecomposeOptions,
    Dimensions,
    OverwritePolicy,
    Quality,
    resolve_spaces,
)
from chromasplit.core.data_types import ColorSpace, ImageBuffer
from chromasplit.core.log import setup_logging
from chromasplit.core.parallel import default_workers
from chromasplit.core.registry import list_colorspaces
from chromasplit.io.image_io import LOAD_ERRORS, SAVE_ERRORS, load_image, save_webp
from chromasplit.render.compositor import decompose_image

logger = logging.getLogger(__name__)

EPILOG = (
    "Loads specified image files and decomposes each into channels, "
    "constructing a new image with all the individual channels side-by-side."
)


def _argument_type(parse):
    """Wrap a parser raising ValueError so argparse reports its message."""
    def convert(arg: str):
        try:
            return parse(arg)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None
    convert.__name__ = parse.__name__
    return convert


def _space_list(arg: str) -> list[ColorSpace]:
    return resolve_spaces(name for name in arg.split(",") if name.strip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chromasplit",
        description="Decomposes images into individual channels",
        epilog=EPILOG,
    )
    parser.add_argument("files", nargs="+", type=Path, help="Image files to process.")
    parser.add_argument(
        "-o", "--out-dir", type=Path,
        help="Directory to save output files in. Defaults to the directory of each input.",
    )

    overwrite = parser.add_mutually_exclusive_group()
    overwrite.add_argument(
        "-y", "--yes", action="store_true",
        help="Overwrite existing files without asking.",
    )
    overwrite.add_argument(
        "-i", "--interactive", action="store_true",
        help="Ask before overwriting existing files. Without -y or -i they are skipped.",
    )

    parser.add_argument(
        "-s", "--spaces", action="append", type=_argument_type(_space_list), default=[],
        help=(
            "Comma-separated colour spaces to generate, compared case-insensitively. "
            f"Supported: {', '.join(list_colorspaces())}. Defaults to all."
        ),
    )

    quality = parser.add_mutually_exclusive_group()
    quality.add_argument(
        "-q", "--quality", type=_argument_type(Quality.parse), default=Quality(),
        help="WebP quality from 0 to 100, or 'lossless'. Default 90.",
    )
    quality.add_argument(
        "--lossless", action="store_true", help="Alias of --quality=lossless.",
    )

    parser.add_argument(
        "--resize", type=_argument_type(Dimensions.parse),
        help="Resize the source to '<width>x<height>' before cropping.",
    )
    parser.add_argument(
        "--crop", type=_argument_type(Crop.parse),
        help=(
            "Crop the source to '<w>x<h>+<x>+<y>'. A '-' offset counts from the "
            "right or bottom edge."
        ),
    )
    parser.add_argument(
        "-j", "--jobs", type=int,
        help="Maximum number of worker threads. Defaults to one per CPU.",
    )
    parser.add_argument(
        "--plain", action="store_true",
        help="Render every channel in grey instead of its own colour.",
    )
    parser.add_argument(
        "--no-source", action="store_true",
        help="Do not prepend the source image to each mosaic.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_options(argv: Sequence[str] | None = None) -> tuple[DecomposeOptions, argparse.Namespace]:
    """Parse command-line arguments into DecomposeOptions."""
    args = build_parser().parse_args(argv)

    if args.yes:
        policy = OverwritePolicy.OVERWRITE
    elif args.interactive:
        policy = OverwritePolicy.INTERACTIVE
    else:
        policy = OverwritePolicy.SKIP

    requested = [space for group in args.spaces for space in group]

    options = DecomposeOptions(
        files=list(args.files),
        out_dir=args.out_dir,
        spaces=resolve_spaces(requested),
        quality=Quality(float("inf")) if args.lossless else args.quality,
        resize=args.resize,
        crop=args.crop,
        policy=policy,
        jobs=args.jobs,
        tinted=not args.plain,
        include_source=not args.no_source,
    )
    return options, args


class Confirmer:
    """Decides whether an output file may be written."""

    def __init__(
        self,
        policy: OverwritePolicy,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.policy = policy
        self._stdin = stdin
        self._stdout = stdout
        # Prompts from concurrent workers must not interleave
        self._lock = threading.Lock()

    def confirm(self, path: Path) -> bool:
        if self.policy is OverwritePolicy.OVERWRITE or not path.exists():
            return True
        if self.policy is OverwritePolicy.INTERACTIVE:
            with self._lock:
                return self._ask(path)
        logger.warning("%s: file already exists, skipping", path)
        return False

    def _ask(self, path: Path) -> bool:
        stdin = self._stdin or sys.stdin
        stdout = self._stdout or sys.stdout
        while True:
            stdout.write(f"{path}: file exists, overwrite? [y/N] ")
            stdout.flush()
            line = stdin.readline()
            if not line:
                stdout.write("N\n")
                return False
            answer = line.rstrip("\r\n")
            if answer in ("y", "Y"):
                return True
            if answer in ("", "n", "N"):
                return False


def generate(
    image: ImageBuffer,
    space: ColorSpace,
    out_file: Path,
    options: DecomposeOptions,
) -> bool:
    """Decompose one image in one model and write the mosaic."""
    logger.info("Generating %s...", out_file)
    result = decompose_image(
        image,
        space,
        tinted=options.tinted,
        include_source=options.include_source,
    )
    try:
        save_webp(result.composite, out_file, options.quality)
    except SAVE_ERRORS as exc:
        logger.error("%s: %s", out_file, exc)
        return False
    return True


def process_file(
    options: DecomposeOptions,
    confirmer: Confirmer,
    path: Path,
    pool: ThreadPoolExecutor,
) -> bool:
    """Generate every requested model for one file. Returns True on success."""
    logger.info("Loading %s...", path)
    try:
        image = load_image(path, resize=options.resize, crop=options.crop)
    except LOAD_ERRORS as exc:
        logger.error("%s: %s", path, exc)
        return False

    futures = []
    for space in options.spaces:
        out_file = options.output_path(path, space)
        if not confirmer.confirm(out_file):
            continue
        futures.append(pool.submit(generate, image, space, out_file, options))

    return all([future.result() for future in futures])


def run(options: DecomposeOptions, confirmer: Confirmer | None = None) -> int:
    """Run a decomposition. Returns the process exit status."""
    if options.out_dir is not None:
        try:
            options.out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("%s: %s", options.out_dir, exc)
            return 1

    confirmer = confirmer or Confirmer(options.policy)
    workers = max(1, options.jobs) if options.jobs is not None else default_workers()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = [process_file(options, confirmer, path, pool) for path in options.files]

    return 0 if all(results) else 1


def main(argv: Sequence[str] | None = None) -> int:
    options, args = parse_options(argv)
    setup_logging(args.verbose)
    return run(options)


if __name__ == "__main__":
    sys.exit(main())
