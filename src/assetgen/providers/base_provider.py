from abc import ABC, abstractmethod
from typing import Optional

import httpx

from assetgen.config import Settings


class BaseImageProvider(ABC):
    def __init__(
        self,
        api_key: str,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.settings = settings
        self.http_client = http_client

    @abstractmethod
    async def generate_image(self, query: str, transparent: bool = True) -> bytes:
        """
        Generates an image for the query and returns its raw bytes.
        The bytes are passed through untouched; no image decoding happens here.
        """
        pass

    async def close(self):
        pass
