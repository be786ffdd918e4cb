"""Error kinds raised along the generate pipeline.

Each error carries a stable ``kind``, the HTTP status it maps to, a generic
human readable ``message`` and the original ``detail`` string.
"""

from typing import Optional


class AssetGenError(Exception):
    kind = "error"
    status_code = 500
    message = "An error occurred while generating the asset."

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationFailure(AssetGenError):
    status_code = 400

    def __init__(self, kind: str, field: Optional[str], message: str):
        detail = f"{kind}: {field}" if field else kind
        super().__init__(detail)
        self.kind = kind
        self.field = field
        self.message = message


class InvalidApiKey(AssetGenError):
    kind = "invalid_api_key"
    status_code = 401
    message = "Invalid or missing API key."


class ProviderRateLimited(AssetGenError):
    kind = "provider_rate_limited"
    status_code = 429
    message = "Rate limit exceeded. Please try again later."


class ProviderBadRequest(AssetGenError):
    kind = "bad_request"
    status_code = 400
    message = "The provider rejected the request."


class ProviderError(AssetGenError):
    kind = "provider_error"

    def __init__(self, detail: str, upstream_status: Optional[int] = None):
        super().__init__(detail)
        self.upstream_status = upstream_status


class NoImageReturned(ProviderError):
    kind = "no_image_returned"


class DownloadFailed(ProviderError):
    kind = "download_failed"


class PersistFailed(AssetGenError):
    kind = "persist_failed"
    message = "Failed to save the generated asset."


def provider_error_for_status(
    status: int, detail: Optional[str], provider_label: str = "OpenAI"
) -> AssetGenError:
    """Map an upstream HTTP status to the matching gateway error."""
    detail = detail or "Unknown error"
    if status == 401:
        return InvalidApiKey("API key is invalid or expired.")
    if status == 429:
        return ProviderRateLimited(f"Rate limit exceeded: {detail}")
    if status == 400:
        return ProviderBadRequest(f"Bad request: {detail}")
    return ProviderError(f"{provider_label} API error ({status}): {detail}", status)
