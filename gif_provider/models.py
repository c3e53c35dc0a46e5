"""Data models for the GIF provider search responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GiphyImage(BaseModel):
    """One rendition of a Giphy GIF."""

    model_config = ConfigDict(extra="ignore")

    url: str = Field(default="", description="Direct URL to the rendition")


class GiphyGif(BaseModel):
    """Single entry of a Giphy search result."""

    model_config = ConfigDict(extra="ignore")

    images: dict[str, GiphyImage] = Field(
        default_factory=dict, description="Renditions keyed by name"
    )


class GiphySearchResponse(BaseModel):
    """Body of `GET /v1/gifs/search`."""

    model_config = ConfigDict(extra="ignore")

    data: list[GiphyGif] = Field(
        default_factory=list, description="Search results"
    )


class GfycatSearchResponse(BaseModel):
    """Body of `GET /v1/gfycats/search`.

    Each gfycat is a flat mapping where rendition names (``gif100px``,
    ``max2mbGif``...) point directly to URLs, mixed with other metadata.
    """

    model_config = ConfigDict(extra="ignore")

    cursor: str | None = Field(default="", description="Token for the next page")
    gfycats: list[dict[str, Any]] = Field(
        default_factory=list, description="Search results"
    )
