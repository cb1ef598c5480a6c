import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from ..config import TemplateConfig
from ..exceptions import TemplateError
from ..pipeline.template_builder import build_template_file
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'
OUTPUT_SUFFIX = "_template.png"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="jersey-template",
        description="Build a two-sided printable jersey template from a front image.",
    )
    ap.add_argument("input", type=Path,
                    help="front jersey image, or a directory of them")
    ap.add_argument("-o", "--output", type=Path, default=None,
                    help="output file (single input) or directory (directory input)")
    ap.add_argument("--collar", type=Path, default=None,
                    help="collar overlay image (overrides COLLAR_PATH)")
    ap.add_argument("--no-collar", action="store_true",
                    help="never add a collar, even if COLLAR_PATH is set")
    ap.add_argument("--gap", type=int, default=None,
                    help="px between back and front content; negative overlaps (default: JERSEY_GAP or -18)")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def _output_for(src: Path, output: Path | None, is_batch: bool) -> Path:
    if is_batch:
        out_dir = output or src.parent
        return out_dir / f"{src.stem}{OUTPUT_SUFFIX}"
    return output or src.with_name(f"{src.stem}{OUTPUT_SUFFIX}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt='%H:%M:%S'
    )

    try:
        config = TemplateConfig.from_env()
    except ValueError as err:
        logger.error(f"Bad configuration: {err}")
        return 1
    if args.collar is not None:
        config = replace(config, collar_path=args.collar)

    if args.input.is_dir():
        repository = ImageRepository(max_pixels=config.max_image_pixels, valid_exts=config.valid_exts)
        sources = [p for p in repository.iter_dir(args.input) if not p.stem.endswith("_template")]
        is_batch = True
    else:
        sources = [args.input]
        is_batch = False

    if not sources:
        logger.error(f"No images found in {args.input}")
        return 1

    failures = 0
    for src in sources:
        dst = _output_for(src, args.output, is_batch)
        try:
            build_template_file(src, dst, gap=args.gap, config=config,
                                use_collar=not args.no_collar)
        except TemplateError as err:
            failures += 1
            logger.error(f"Failed to process {src}: {err}")

    logger.info(f"Processed {len(sources) - failures}/{len(sources)} images")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
