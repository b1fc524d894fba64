from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .config import Settings, find_config
from .errors import MetadataFileError
from .parser import parse_metadata_file

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def configure_logging(level: str) -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)


def run_check(paths: List[Path], settings: Settings, out: TextIO) -> int:
    failed = 0
    for path in paths:
        try:
            parsed = parse_metadata_file(path, settings.parser)
        except MetadataFileError as exc:
            failed += 1
            logger.debug("%s failed with %s at offset %s", path, exc.kind, exc.offset)
            out.write(f"{path}: ERROR ({exc.message})\n")
            continue
        out.write(f"{path}: OK ({len(parsed.elements)} tags)\n")
    return 1 if failed else 0


def run_dump(path: Path, settings: Settings, out: TextIO, *, vorbis: bool = False) -> int:
    try:
        parsed = parse_metadata_file(path, settings.parser)
    except MetadataFileError as exc:
        out.write(f"{path}: ERROR ({exc.message})\n")
        return 1
    if vorbis:
        # Multi-line values are written back in the indented block form.
        for tag, value in parsed.pairs():
            if "\n" in value:
                out.write(f"{tag}=\n")
                for line in value.split("\n"):
                    out.write(f"\t{line}\n")
            else:
                out.write(f"{tag}={value}\n")
        return 0
    payload = [{"tag": tag, "value": value} for tag, value in parsed.pairs()]
    json.dump(payload, out, ensure_ascii=False, indent=2)
    out.write("\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect TAG=VALUE metadata files")
    parser.add_argument("--config", type=Path, help="Path to metadata-file.yaml")
    parser.add_argument("--log-level", default=None, help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    check_parser = subparsers.add_parser("check", help="Validate one or more metadata files")
    check_parser.add_argument("files", nargs="+", type=Path)
    dump_parser = subparsers.add_parser("dump", help="Print the parsed tags of a metadata file")
    dump_parser.add_argument("file", type=Path)
    dump_parser.add_argument(
        "--vorbis",
        action="store_true",
        help="Print TAG=VALUE lines instead of JSON (debugging view, nothing is written to disk)",
    )

    args = parser.parse_args(argv)

    config_path = find_config(args.config)
    settings = Settings.load(config_path) if config_path else Settings()
    configure_logging(args.log_level or settings.log_level)
    if config_path:
        logger.debug("Using config %s", config_path)

    if args.command == "check":
        return run_check(args.files, settings, sys.stdout)
    return run_dump(args.file, settings, sys.stdout, vorbis=args.vorbis)
