import httpx
import base64
import binascii
from pathlib import Path
import logging
from typing import Optional, Tuple, Union
import uuid
import re

from assetgen.errors import DownloadFailed, NoImageReturned, PersistFailed

logger = logging.getLogger(__name__)

MAX_SLUG_LENGTH = 50


def slugify_query(query: str) -> str:
    """Turns a query into a lower-case, underscore separated slug."""
    slug = re.sub(r"[^a-z0-9]+", "_", query.lower())
    slug = re.sub(r"^_|_$", "", slug)
    return slug[:MAX_SLUG_LENGTH]


def generate_asset_filename(query: str, asset_format: Optional[str] = None) -> str:
    random_str = str(uuid.uuid4())[:8]
    return f"{slugify_query(query)}_{asset_format or 'image'}_{random_str}.png"


async def download_image(image_url: str, client: httpx.AsyncClient) -> bytes:
    logger.info(f"Downloading image from: {image_url}")
    try:
        response = await client.get(image_url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(
            f"HTTP error downloading image {image_url}: {e.response.status_code}"
        )
        raise DownloadFailed(
            f"Failed to download image: HTTP {e.response.status_code}",
            e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        logger.error(f"Error downloading image {image_url}: {e}")
        raise DownloadFailed(f"Failed to download image: {e}") from e
    return response.content


def decode_b64_image(b64_json: str) -> bytes:
    try:
        return base64.b64decode(b64_json, validate=True)
    except (binascii.Error, ValueError) as e:
        raise NoImageReturned(f"Invalid base64 image data: {e}") from e


def save_image_bytes(
    base_path: Union[str, Path],
    query: str,
    asset_format: Optional[str],
    image_bytes: bytes,
) -> Tuple[str, str]:
    """Writes image bytes under base_path and returns (file_path, file_name).

    An existing file with the same name is overwritten.
    """
    file_name = generate_asset_filename(query, asset_format)
    output_path = Path(base_path) / file_name
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(image_bytes)
    except OSError as e:
        logger.error(f"Error saving image to disk at {output_path}: {e}")
        raise PersistFailed(f"Failed to save image: {e}") from e
    logger.info(f"Image saved at: {output_path}")
    return str(output_path), file_name
