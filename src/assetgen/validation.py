from typing import Any, Mapping

from assetgen.config import StoredConfig
from assetgen.errors import InvalidApiKey, ValidationFailure
from assetgen.models import (
    ASSET_FORMATS,
    ASSET_TYPES,
    PROVIDER_NAMES,
    GenerationRequest,
    ResolvedCredentials,
)


def _missing(field: str, message: str = "") -> ValidationFailure:
    return ValidationFailure(
        "missing_field", field, message or f"Missing required field: {field}"
    )


def validate_generate_request(
    body: Any, stored_config: StoredConfig
) -> GenerationRequest:
    """Check a decoded request body and build a GenerationRequest.

    Rules are applied in order and the first failure is raised as a
    ValidationFailure. Empty values of optional fields count as absent.
    """
    if not isinstance(body, Mapping):
        body = {}

    query = body.get("query")
    asset_type = body.get("type")
    asset_format = body.get("format")
    style = body.get("style")
    api_key = body.get("api_key")
    provider = body.get("provider")

    if not query:
        raise _missing("query")

    if not asset_type:
        raise _missing("type")
    if asset_type not in ASSET_TYPES:
        raise ValidationFailure(
            "unsupported_type",
            "type",
            'Unsupported asset type. Currently only "image" is supported.',
        )

    if asset_format and asset_format not in ASSET_FORMATS:
        raise ValidationFailure(
            "unsupported_format",
            "format",
            f"Unsupported format. Supported formats are: {', '.join(ASSET_FORMATS)}",
        )

    effective_provider = provider or stored_config.default_provider
    if not api_key and not _default_key(stored_config, effective_provider):
        raise _missing(
            "api_key",
            "Missing required field: api_key. You must provide your own API key "
            "or configure one using the CLI.",
        )

    if provider and provider not in PROVIDER_NAMES:
        raise ValidationFailure(
            "unsupported_provider",
            "provider",
            f"Unsupported provider. Supported providers are: {', '.join(PROVIDER_NAMES)}",
        )

    transparent = True
    if "transparent" in body:
        transparent = body["transparent"]
        if not isinstance(transparent, bool):
            raise ValidationFailure(
                "invalid_type",
                "transparent",
                "Invalid value for transparent. Must be a boolean (true or false).",
            )

    for field, value in (("query", query), ("style", style), ("api_key", api_key)):
        if value is not None and not isinstance(value, str):
            raise ValidationFailure(
                "invalid_type", field, f"Invalid value for {field}. Must be a string."
            )

    return GenerationRequest(
        query=query,
        type=asset_type,
        format=asset_format or None,
        style=style or None,
        api_key=api_key or None,
        provider=provider or None,
        transparent=transparent,
    )


def _default_key(stored_config: StoredConfig, provider: Any):
    if not isinstance(provider, str):
        return None
    return stored_config.default_api_key(provider)


def resolve_credentials(
    request: GenerationRequest, stored_config: StoredConfig
) -> ResolvedCredentials:
    provider = request.provider or stored_config.default_provider
    api_key = request.api_key or stored_config.default_api_key(provider)
    if not api_key:
        raise InvalidApiKey(
            f"No API key provided for {provider}. Please provide an API key "
            "or configure one using the CLI."
        )
    return ResolvedCredentials(provider=provider, api_key=api_key)
