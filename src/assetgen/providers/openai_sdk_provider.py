import httpx
from openai import AsyncOpenAI, APIConnectionError, APIStatusError
from typing import Optional
import logging

from assetgen.config import Settings
from assetgen.errors import NoImageReturned, ProviderError, provider_error_for_status
from assetgen.providers.base_provider import BaseImageProvider
from assetgen.utils import decode_b64_image, download_image

logger = logging.getLogger(__name__)

TRANSPARENT_SUFFIX = " with transparent background"


def build_prompt(query: str, transparent: bool = True) -> str:
    return f"{query}{TRANSPARENT_SUFFIX}" if transparent else query


def _error_detail(error: APIStatusError) -> Optional[str]:
    body = error.body
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict) and inner.get("message"):
            return str(inner["message"])
    return None


class OpenAISDKProvider(BaseImageProvider):
    def __init__(
        self,
        api_key: str,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=settings.request_timeout)
        super().__init__(api_key, settings, http_client)
        client_params = {
            "api_key": api_key,
            "timeout": settings.request_timeout,
            # Failed calls are terminal for the request.
            "max_retries": 0,
            "http_client": http_client,
        }
        if settings.openai_base_url:
            client_params["base_url"] = str(settings.openai_base_url)
        self.async_client = AsyncOpenAI(**client_params)

    async def generate_image(self, query: str, transparent: bool = True) -> bytes:
        prompt = build_prompt(query, transparent)
        logger.info(f'Calling OpenAI API with prompt: "{prompt}"')
        try:
            api_response = await self.async_client.images.generate(
                model=self.settings.openai_image_model,
                prompt=prompt,
                n=1,
                size=self.settings.openai_image_size,
                response_format="url",
            )
        except APIStatusError as e:
            detail = _error_detail(e)
            logger.error(f"OpenAI API returned {e.status_code}: {detail or e.message}")
            raise provider_error_for_status(e.status_code, detail) from e
        except APIConnectionError as e:
            logger.error(f"Error calling OpenAI API: {e}")
            raise ProviderError(f"Failed to call OpenAI API: {e}") from e

        if not api_response.data:
            raise NoImageReturned("No image data returned from OpenAI API")
        image_data = api_response.data[0]
        if image_data.url:
            return await download_image(image_data.url, self.http_client)
        if image_data.b64_json:
            return decode_b64_image(image_data.b64_json)
        raise NoImageReturned("No image data found in OpenAI API response")

    async def close(self):
        await self.async_client.close()
        if self._owns_http_client:
            await self.http_client.aclose()
