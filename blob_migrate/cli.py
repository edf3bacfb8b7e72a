"""Command-line entry points for the blob migration tools."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Sequence

from .config import (
    DEFAULT_UPLOAD_DELAY,
    IMAGES_DIR,
    MAPPING_FILE,
    MARKUP_EXTENSION,
    TOKEN_HELP,
    MissingCredentialError,
    RewriteConfig,
    UploadConfig,
    resolve_api_url,
    resolve_token,
)
from .mapping import MappingNotFoundError
from .rewriter import run_rewriter
from .storage import BlobClient
from .uploader import run_uploader

logger = logging.getLogger("blob_migrate.cli")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        force=True,
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--mapping",
        default=MAPPING_FILE,
        type=Path,
        help="Path of the JSON file mapping local image paths to blob URLs",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_upload_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Upload local images to Vercel Blob storage and record their URLs.",
    )
    parser.add_argument(
        "--images-dir",
        default=IMAGES_DIR,
        type=Path,
        help="Flat directory containing the images to upload",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_UPLOAD_DELAY,
        help="Seconds to pause between uploads to stay under provider rate limits",
    )
    _add_common_arguments(parser)
    return parser.parse_args(argv)


def parse_rewrite_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replace local image paths in HTML files with blob URLs.",
    )
    parser.add_argument(
        "--root",
        default=".",
        type=Path,
        help="Directory tree to search for HTML files",
    )
    _add_common_arguments(parser)
    return parser.parse_args(argv)


def upload_main(argv: Sequence[str] | None = None) -> int:
    args = parse_upload_args(argv)
    _configure_logging(args.verbose)

    try:
        token = resolve_token(os.environ)
    except MissingCredentialError as exc:
        logger.error("Error: %s", exc)
        for line in TOKEN_HELP.splitlines():
            logger.error(line)
        return 1

    config = UploadConfig(
        images_dir=args.images_dir,
        mapping_path=args.mapping,
        token=token,
        delay_seconds=args.delay,
        api_url=resolve_api_url(os.environ),
    )
    client = BlobClient(config.token, config.api_url)
    try:
        run_uploader(config, client)
    except FileNotFoundError as exc:
        logger.error("Error: %s", exc)
        return 1
    return 0


def rewrite_main(argv: Sequence[str] | None = None) -> int:
    args = parse_rewrite_args(argv)
    _configure_logging(args.verbose)

    config = RewriteConfig(
        root=args.root,
        mapping_path=args.mapping,
        extension=MARKUP_EXTENSION,
    )
    try:
        run_rewriter(config)
    except MappingNotFoundError as exc:
        logger.error("Error: %s", exc)
        logger.error("Please run upload-images-to-blob first")
        return 1
    return 0

