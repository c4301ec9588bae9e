"""
Image loader - decodes uploaded photos off the UI thread.

Each upload becomes a numbered request on a shared thread pool. Only the
newest request may turn into the photo: when an older decode finishes after a
newer upload was submitted, its result is dropped.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait as wait_for
from dataclasses import dataclass
from typing import Dict, Optional

import cv2
import numpy as np

from app_config.constants import PerformanceConfig

logger = logging.getLogger(__name__)

# Global executor shared by every session
executor = ThreadPoolExecutor(max_workers=PerformanceConfig.DECODE_WORKERS)


def decode_image(data: bytes, max_dim: int = PerformanceConfig.MAX_IMAGE_DIMENSION) -> Optional[np.ndarray]:
    """
    Decode encoded image bytes into an RGB array.

    Args:
        data: Raw file contents (PNG, JPEG, WEBP, ...)
        max_dim: Longest side kept; larger images are downscaled

    Returns:
        np.ndarray (H, W, 3) uint8 in RGB order, or None if ``data`` is not
        a decodable image.
    """
    if not data:
        return None
    try:
        file_bytes = np.frombuffer(data, dtype=np.uint8)
        image = cv2.imdecode(file_bytes, cv2.IMREAD_COLOR)
    except cv2.error as e:
        logger.warning(f"Decode failed: {e}")
        return None

    if image is None:
        logger.warning("Uploaded file is not a decodable image")
        return None

    image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    h, w = image.shape[:2]
    if max(h, w) > max_dim:
        scale = max_dim / max(h, w)
        image = cv2.resize(image, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_AREA)
    return image


@dataclass(frozen=True)
class LoadResult:
    request_id: int
    photo: Optional[np.ndarray]

    @property
    def ok(self) -> bool:
        return self.photo is not None


class ImageLoader:
    """Tracks decode requests for one session."""

    def __init__(self, pool: Optional[ThreadPoolExecutor] = None):
        self._pool = pool or executor
        self._latest = 0
        self._futures: Dict[int, Future] = {}

    @property
    def latest_request(self) -> int:
        return self._latest

    @property
    def pending(self) -> bool:
        """True while the newest request is still decoding."""
        future = self._futures.get(self._latest)
        return future is not None and not future.done()

    def submit(self, data: bytes) -> int:
        self._latest += 1
        self._futures[self._latest] = self._pool.submit(decode_image, data)
        logger.debug(f"Decode request {self._latest} submitted ({len(data)} bytes)")
        return self._latest

    def collect(self, wait: bool = False) -> Optional[LoadResult]:
        """
        Harvest finished decodes.

        Completed requests older than the newest one are discarded. Returns
        the newest request's result once it is done (its ``photo`` is None if
        the file could not be decoded), otherwise None.

        Args:
            wait: Block until the newest request has finished.
        """
        for request_id in sorted(self._futures):
            future = self._futures[request_id]
            if request_id != self._latest:
                if future.done():
                    del self._futures[request_id]
                    logger.debug(f"Discarded stale decode request {request_id}")
                continue

            if wait:
                wait_for([future])
            if not future.done():
                return None

            del self._futures[request_id]
            try:
                photo = future.result()
            except Exception as e:
                logger.warning(f"Decode request {request_id} failed: {e}")
                photo = None
            return LoadResult(request_id, photo)
        return None
