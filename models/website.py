"""
Website generation models for SiteCraft
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from enum import Enum

from config.site_options import DEFAULT_FORM, MIN_EXTRA_IMAGES, MAX_EXTRA_IMAGES


class SiteType(str, Enum):
    PORTFOLIO = "Portfolio"
    BLOG = "Blog"
    E_COMMERCE = "E-Commerce"
    LANDING_PAGE = "Landing Page"
    CUSTOM = "Custom"


class IconStyle(str, Enum):
    FLAT = "Flat"
    THREE_D = "3D"
    HAND_DRAWN = "Hand-drawn"
    REALISTIC = "Realistic"


class FormState(BaseModel):
    """
    Snapshot of the website specification form, taken when the user submits.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(default=DEFAULT_FORM["title"], min_length=1)
    description: str = Field(default=DEFAULT_FORM["description"], min_length=1)
    type: SiteType = Field(default=SiteType(DEFAULT_FORM["type"]))
    features: List[str] = Field(default_factory=lambda: list(DEFAULT_FORM["features"]))
    custom_prompt: str = Field(default=DEFAULT_FORM["customPrompt"], alias="customPrompt")

    # Database
    need_database: bool = Field(default=DEFAULT_FORM["needDatabase"], alias="needDatabase")
    db_host: str = Field(default=DEFAULT_FORM["dbHost"], alias="dbHost")
    db_username: str = Field(default=DEFAULT_FORM["dbUsername"], alias="dbUsername")
    db_password: str = Field(default=DEFAULT_FORM["dbPassword"], alias="dbPassword")
    db_name: str = Field(default=DEFAULT_FORM["dbName"], alias="dbName")
    table_details: str = Field(default=DEFAULT_FORM["tableDetails"], alias="tableDetails")

    # Image generation
    generate_images: bool = Field(default=DEFAULT_FORM["generateImages"], alias="generateImages")
    logo_prompt: str = Field(default=DEFAULT_FORM["logoPrompt"], alias="logoPrompt")
    banner_prompt: str = Field(default=DEFAULT_FORM["bannerPrompt"], alias="bannerPrompt")
    icon_style: IconStyle = Field(default=IconStyle(DEFAULT_FORM["iconStyle"]), alias="iconStyle")
    image_count: int = Field(
        default=DEFAULT_FORM["imageCount"],
        ge=MIN_EXTRA_IMAGES,
        le=MAX_EXTRA_IMAGES,
        alias="imageCount",
    )


class ImagePrompt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(..., alias="fileName", description="Intended file name, e.g. 'logo.png'")
    prompt: str = Field(..., description="Prompt for the image generation model")
    alt_text: str = Field(..., alias="altText", description="Accessibility text for the image")


class GenerationRequest(BaseModel):
    """Composed prompt plus the response schema the text model must follow."""
    prompt: str
    response_schema: Dict[str, Any]


class GeneratedArtifacts(BaseModel):
    """
    Text output of one text-generation call. Each top-level text field can be
    edited independently afterwards.
    """
    model_config = ConfigDict(populate_by_name=True)

    html: str
    css: str
    js: str
    server_code: Optional[str] = Field(default=None, alias="serverCode")
    server_file_name: Optional[str] = Field(default=None, alias="serverFileName")
    image_prompts: List[ImagePrompt] = Field(default_factory=list, alias="imagePrompts")

    @property
    def has_server_file(self) -> bool:
        return bool(self.server_code and self.server_file_name)


class ImageAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str
    alt_text: str
    data: bytes
