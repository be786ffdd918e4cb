from typing import Dict, Optional, Type
import logging

import httpx

from assetgen.config import Settings, StoredConfig, resolve_storage_path
from assetgen.errors import ValidationFailure
from assetgen.models import AssetMeta, GeneratedAsset, GenerationRequest
from assetgen.providers.base_provider import BaseImageProvider
from assetgen.providers.openai_sdk_provider import OpenAISDKProvider
from assetgen.providers.placeholder_provider import PlaceholderProvider
from assetgen.utils import save_image_bytes
from assetgen.validation import resolve_credentials

logger = logging.getLogger(__name__)

PROVIDERS: Dict[str, Type[BaseImageProvider]] = {
    "openai": OpenAISDKProvider,
    "stability": PlaceholderProvider,
    "replicate": PlaceholderProvider,
}


async def generate_asset_core(
    request: GenerationRequest,
    stored_config: StoredConfig,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GeneratedAsset:
    """Generate the image for a validated request and save it to disk.

    `transport` replaces the network layer of every outbound call, which is
    how tests stand in for the provider.
    """
    credentials = resolve_credentials(request, stored_config)
    provider_cls = PROVIDERS.get(credentials.provider)
    if provider_cls is None:
        raise ValidationFailure(
            "unsupported_provider",
            "provider",
            f"Unsupported provider: {credentials.provider}",
        )

    logger.info(
        f'Generating image with {credentials.provider} for query: "{request.query}"'
    )
    async with httpx.AsyncClient(
        timeout=settings.request_timeout, transport=transport
    ) as http_client:
        provider = provider_cls(credentials.api_key, settings, http_client)
        try:
            image_bytes = await provider.generate_image(
                request.query, request.transparent
            )
        finally:
            await provider.close()

    file_path, file_name = save_image_bytes(
        resolve_storage_path(settings, stored_config),
        request.query,
        request.format,
        image_bytes,
    )
    return GeneratedAsset(
        file_path=file_path,
        file_name=file_name,
        meta=AssetMeta(
            style=request.style or "default",
            transparent=request.transparent,
            query=request.query,
        ),
    )
