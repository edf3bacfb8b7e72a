"""Sequential upload of local images to the blob store."""

from __future__ import annotations

import logging
import time
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Iterable, List, Optional, Union

from .config import DEFAULT_UPLOAD_DELAY, UploadConfig
from .images import content_type_for, find_images
from .mapping import build_url_mapping, write_mapping
from .models import ImageRecord, UploadFailure, UploadResult, UploadSuccess, UploadSummary
from .storage import BlobClient, BlobStoreError

logger = logging.getLogger("blob_migrate")

DelayStrategy = Union[float, Callable[[int], float]]


class UploadQueue:
    """FIFO queue that runs one upload at a time with a pause after each.

    ``delay`` is either a fixed number of seconds or a callable receiving the
    zero-based index of the upload that just finished. ``sleep`` is the blocking
    pause, replaceable in tests.
    """

    def __init__(
        self,
        upload: Callable[[ImageRecord], UploadResult],
        delay: DelayStrategy = DEFAULT_UPLOAD_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._upload = upload
        self._delay = delay
        self._sleep = sleep
        self._pending: Deque[ImageRecord] = deque()
        self.in_flight: Optional[ImageRecord] = None

    def __len__(self) -> int:
        return len(self._pending)

    def extend(self, records: Iterable[ImageRecord]) -> None:
        self._pending.extend(records)

    def _delay_for(self, index: int) -> float:
        if callable(self._delay):
            return self._delay(index)
        return self._delay

    def drain(self) -> List[UploadResult]:
        """Process every pending record in order and return their results."""
        results: List[UploadResult] = []
        index = 0
        while self._pending:
            self.in_flight = self._pending.popleft()
            try:
                results.append(self._upload(self.in_flight))
            finally:
                self.in_flight = None
            pause = self._delay_for(index)
            if pause > 0:
                self._sleep(pause)
            index += 1
        return results


def upload_image(client: BlobClient, record: ImageRecord) -> UploadResult:
    """Upload one image, converting per-file errors into an ``UploadFailure``."""
    try:
        data = record.path.read_bytes()
        content_type = content_type_for(record.file_name, data)
        logger.info("Uploading %s...", record.file_name)
        blob = client.put(record.file_name, data, content_type)
    except (BlobStoreError, OSError) as exc:
        logger.warning("Failed to upload %s: %s", record.file_name, exc)
        return UploadFailure(record=record, reason=str(exc))
    logger.info("Uploaded: %s -> %s", record.file_name, blob.url)
    return UploadSuccess(record=record, url=blob.url)


def run_uploader(
    config: UploadConfig,
    client: BlobClient,
    sleep: Callable[[float], None] = time.sleep,
) -> UploadSummary:
    """Upload every image in ``config.images_dir`` and write the URL mapping."""
    logger.info("Starting Vercel Blob Storage upload...")
    images = find_images(config.images_dir)
    logger.info("%d images found in %s", len(images), config.images_dir)
    summary = UploadSummary(found=len(images))
    if not images:
        logger.info("No images found to upload.")
        return summary

    queue = UploadQueue(
        lambda record: upload_image(client, record),
        delay=config.delay_seconds,
        sleep=sleep,
    )
    queue.extend(images)
    summary.results = queue.drain()

    mapping = build_url_mapping(summary.successes)
    write_mapping(mapping, config.mapping_path)

    logger.info(
        "Successfully uploaded %d out of %d images", summary.succeeded, summary.found
    )
    for failure in summary.failures:
        logger.info("  failed: %s (%s)", failure.record.file_name, failure.reason)
    logger.info("URL mapping saved to %s", config.mapping_path)
    logger.info("Next steps:")
    logger.info("1. Review %s", Path(config.mapping_path).name)
    logger.info("2. Run update-image-urls to replace image URLs in HTML files")
    return summary
