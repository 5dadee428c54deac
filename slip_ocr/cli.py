"""Command-line interface for slip OCR.

Provides subcommands for extracting a single slip to JSON and for
processing a folder of slips into a CSV file.
"""

import argparse
import csv
import json
import sys
from pathlib import Path

from slip_ocr.errors import PipelineError
from slip_ocr.pipeline import SlipPipeline
from slip_ocr.utils.config import load_config
from slip_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.png", "*.jpg", "*.jpeg", "*.webp", "*.bmp", "*.tiff", "*.tif")
_CSV_COLUMNS = ["filename", "status", "institution", "amount", "date", "error"]


def _find_images(input_dir: Path) -> list[Path]:
    """Find all supported slip images in a directory.

    Args:
        input_dir: Directory to scan.

    Returns:
        Sorted list of image paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def _build_pipeline(config_path: Path | None) -> SlipPipeline:
    return SlipPipeline.from_config(load_config(config_path))


def process_folder(
    input_dir: Path,
    output_csv: Path,
    config_path: Path | None = None,
    verbose: bool = False,
) -> dict[str, int]:
    """Process every slip image in a folder and write the results to CSV.

    A failing image is recorded as a failed row and does not stop the batch.

    Args:
        input_dir: Directory containing slip images.
        output_csv: Path for the output CSV file.
        config_path: Optional configuration file.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    files = _find_images(input_dir)
    if not files:
        logger.warning("No images found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d images to process", len(files))
    pipeline = _build_pipeline(config_path)

    rows: list[dict[str, object]] = []
    successful = 0

    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")

        try:
            raw = file_path.read_bytes()
        except OSError as exc:
            logger.error("Failed to read %s: %s", file_path.name, exc)
            rows.append(
                {"filename": file_path.name, "status": "failed", "error": str(exc)}
            )
            continue

        outcome = pipeline.try_run(raw)
        if outcome.ok:
            data = outcome.result.to_dict()
            rows.append(
                {
                    "filename": file_path.name,
                    "status": "success",
                    "institution": data["institution"],
                    "amount": data["amount"],
                    "date": data["date"],
                    "error": None,
                }
            )
            successful += 1
        else:
            rows.append(
                {
                    "filename": file_path.name,
                    "status": "failed",
                    "error": str(outcome.error),
                }
            )

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {
        "total": len(files),
        "successful": successful,
        "failed": len(files) - successful,
    }
    _print_summary(summary, output_csv)
    return summary


def _write_csv(rows: list[dict[str, object]], output_path: Path) -> None:
    """Write per-slip rows to a CSV file with a fixed column order."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Slip Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def extract_single(file_path: Path, config_path: Path | None = None) -> dict[str, object]:
    """Process one slip image.

    Args:
        file_path: Path to the slip image.
        config_path: Optional configuration file.

    Returns:
        Dictionary with the filename and the extracted fields.

    Raises:
        PipelineError: If the image cannot be normalized or recognized.
    """
    pipeline = _build_pipeline(config_path)
    result = pipeline.run(file_path.read_bytes())
    return {"filename": file_path.name, **result.to_dict()}


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Lao payment slip OCR",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", type=Path, help="YAML configuration file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    batch_parser = subparsers.add_parser("batch", help="Process a folder of slips")
    batch_parser.add_argument("input_dir", type=Path, help="Input directory with images")
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    single_parser = subparsers.add_parser("extract", help="Process a single slip")
    single_parser.add_argument("file", type=Path, help="Slip image to process")
    single_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    args = parser.parse_args(argv)

    setup_logging(load_config(args.config).log_level)

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(args.input_dir, args.output, args.config, args.verbose)
    elif args.command == "extract":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            result = extract_single(args.file, args.config)
        except PipelineError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        output_str = json.dumps(result, indent=2, ensure_ascii=False)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str, encoding="utf-8")
            print(f"Output written to {args.output}")
        else:
            print(output_str)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
