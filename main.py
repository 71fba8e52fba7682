import argparse
import sys
from pathlib import Path

from config.config import DEFAULT_OVERWRITE, DEFAULT_WORKERS, SETTINGS_PATH
from splittt.errors import ConfigurationError, SplitttError
from splittt.pdf.pdf_splitter import plan_pdf_split, run_pdf_split
from splittt.utils.logger import set_level, setup_logger
from splittt.utils.settings_loader import load_settings

logger = setup_logger("splittt.pipeline")


def resolve_options(args):
    """Merge CLI flags over the settings file over environment defaults."""
    settings_path = Path(args.settings) if args.settings else SETTINGS_PATH
    settings = load_settings(settings_path, required=bool(args.settings))

    workers = args.workers
    if workers is None:
        workers = settings.get("workers", DEFAULT_WORKERS)
    if workers < 1:
        raise ConfigurationError("--workers must be at least 1.")

    overwrite = args.overwrite or settings.get("overwrite", DEFAULT_OVERWRITE)
    show_progress = not args.no_progress and settings.get("show_progress", True)
    return workers, overwrite, show_progress


def run_pipeline(args):
    if args.debug:
        set_level("DEBUG")
        logger.debug("Debug logging enabled.")

    input_path = Path(args.input)
    output_dir = Path(args.output)

    if args.plan_only:
        ranges = plan_pdf_split(input_path, args.split)
        for idx, page_range in enumerate(ranges, start=1):
            print(f"chunk {idx}: {page_range.label()}")
        return []

    workers, overwrite, show_progress = resolve_options(args)
    logger.info(f"Starting split of {input_path} into {output_dir}")
    chunk_files = run_pdf_split(
        input_path,
        output_dir,
        args.split,
        workers=workers,
        overwrite=overwrite,
        show_progress=show_progress,
    )
    logger.info(f"Wrote {len(chunk_files)} chunk file(s) to {output_dir}")
    return chunk_files


def build_parser():
    parser = argparse.ArgumentParser(
        prog="splittt",
        description="Chunk a PDF file into smaller PDF files in a new folder.",
    )
    parser.add_argument(
        "-i", "--input", type=str, required=True, help="Path to the input PDF file."
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        required=True,
        help="Directory to store the chunk files (created if missing).",
    )
    parser.add_argument(
        "-s",
        "--split",
        type=str,
        required=True,
        help="Pages per chunk (e.g. -s 30) or number of equal chunks (e.g. -s c5).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of chunks extracted in parallel.",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace chunk files that already exist in the output directory.",
    )
    parser.add_argument(
        "--plan_only",
        action="store_true",
        help="Only print the page ranges of each chunk, write nothing.",
    )
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="YAML settings file. Defaults to config/settings.yaml.",
    )
    parser.add_argument(
        "--no_progress", action="store_true", help="Hide the progress bar."
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def cli(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        run_pipeline(args)
    except SplitttError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted, chunk files written so far are kept.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(cli())
