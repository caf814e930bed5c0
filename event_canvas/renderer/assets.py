"""
Image and QR assets for rendered units

Loading an image and encoding a QR code are the only slow steps of a render.
They run off the event loop and fail with `AssetError`, which renderers turn
into placeholders.
"""

import asyncio
import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Dict, Optional

import qrcode
from qrcode.exceptions import DataOverflowError
from PIL import Image, UnidentifiedImageError

from event_canvas.errors import AssetError

logger = logging.getLogger(__name__)


def _decode_data_uri(reference: str) -> bytes:
    header, _, data = reference.partition(",")
    if not data:
        raise AssetError("Empty data URI")
    if ";base64" in header:
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AssetError(f"Invalid base64 image data: {e}") from e
    return data.encode("utf-8")


def load_image(reference: str, base_dir: Optional[Path] = None) -> Image.Image:
    """
    Open an image reference (`data:` URI or file path).

    Raises:
        AssetError: reference is empty, missing, remote, too large or not an image
    """
    if not reference:
        raise AssetError("No image reference")
    if reference.startswith(("http://", "https://")):
        raise AssetError(f"Remote images are not fetched: {reference}")

    if reference.startswith("data:"):
        source = io.BytesIO(_decode_data_uri(reference))
    else:
        path = Path(reference)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        if not path.exists():
            raise AssetError(f"Image not found: {path}")
        source = path

    try:
        with Image.open(source) as img:
            img.load()
            return img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise AssetError(f"Unreadable image {reference[:60]}: {e}") from e


def encode_qr(payload: str, box_size: int = 10, border: int = 1) -> Image.Image:
    """
    Encode a payload into a black-on-white QR image.

    Raises:
        AssetError: payload is empty or does not fit a QR code
    """
    if not payload:
        raise AssetError("Empty QR payload")
    try:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=box_size,
            border=border,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        buffer.seek(0)
        with Image.open(buffer) as img:
            img.load()
            return img.convert("RGB")
    except (DataOverflowError, Image.DecompressionBombError, ValueError) as e:
        raise AssetError(f"QR encoding failed: {e}") from e


class AssetLoader:
    """Per-export cache of decoded images and QR codes"""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir
        self._images: Dict[str, Image.Image] = {}
        self._qr: Dict[str, Image.Image] = {}

    async def image(self, reference: str) -> Image.Image:
        if reference not in self._images:
            self._images[reference] = await asyncio.to_thread(load_image, reference, self.base_dir)
        return self._images[reference]

    async def qr(self, payload: str) -> Image.Image:
        if payload not in self._qr:
            self._qr[payload] = await asyncio.to_thread(encode_qr, payload)
        return self._qr[payload]
