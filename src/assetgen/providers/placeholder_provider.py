import base64
import logging

from assetgen.providers.base_provider import BaseImageProvider

logger = logging.getLogger(__name__)

# 1x1 grayscale+alpha pixel with alpha 0.
TRANSPARENT_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)
# 1x1 opaque white RGB pixel.
OPAQUE_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAIAAACQd1PeAAAADElEQVQI12P4//8/AAX+Av7czFnnAAAAAElFTkSuQmCC"
)


def placeholder_image(transparent: bool = True) -> bytes:
    return TRANSPARENT_PNG if transparent else OPAQUE_PNG


class PlaceholderProvider(BaseImageProvider):
    """Stand-in for providers without an integration yet.

    Always succeeds with a fixed 1x1 PNG and never touches the network.
    """

    async def generate_image(self, query: str, transparent: bool = True) -> bytes:
        logger.info(f'Using placeholder image for query: "{query}"')
        return placeholder_image(transparent)
