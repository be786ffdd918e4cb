from pydantic import BaseModel, ConfigDict
from typing import Optional, Literal

AssetType = Literal["image"]
AssetFormat = Literal["sprite", "icon", "component"]
ProviderName = Literal["openai", "stability", "replicate"]

ASSET_TYPES = ("image",)
ASSET_FORMATS = ("sprite", "icon", "component")
PROVIDER_NAMES = ("openai", "stability", "replicate")


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str
    type: AssetType
    format: Optional[AssetFormat] = None
    style: Optional[str] = None
    api_key: Optional[str] = None
    provider: Optional[ProviderName] = None
    transparent: bool = True


class ResolvedCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: str
    api_key: str


class AssetMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: Literal["png"] = "png"
    style: str = "default"
    dimensions: str = "256x256"
    transparent: bool = True
    query: str


class GeneratedAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    file_path: str
    file_name: str
    meta: AssetMeta


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
    details: Optional[str] = None
