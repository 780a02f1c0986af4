"""
Workspace models for SiteCraft: the current generation state and the
shapes returned to the frontend.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from models.website import FormState, GeneratedArtifacts, ImageAsset


class WorkspaceState(BaseModel):
    """
    Immutable snapshot of the builder. Every transition produces a new one.
    """
    model_config = ConfigDict(frozen=True)

    form: Optional[FormState] = None
    artifacts: Optional[GeneratedArtifacts] = None
    images: List[ImageAsset] = Field(default_factory=list)
    is_loading: bool = False
    loading_message: str = ""
    error: Optional[str] = None


class EditRequest(BaseModel):
    value: str = Field(..., description="New contents for the edited file.")


class ImageInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(..., alias="fileName")
    alt_text: str = Field(..., alias="altText")
    data_uri: Optional[str] = Field(default=None, alias="dataUri")


class WorkspaceResponse(BaseModel):
    """
    Model for returning the current workspace to the frontend.
    """
    model_config = ConfigDict(populate_by_name=True)

    artifacts: Optional[GeneratedArtifacts] = None
    images: List[ImageInfo] = Field(default_factory=list)
    views: List[str] = Field(default_factory=list)
    is_loading: bool = Field(default=False, alias="isLoading")
    loading_message: str = Field(default="", alias="loadingMessage")
    error: Optional[str] = None
