"""
Website builder routes for SiteCraft
"""
from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.responses import HTMLResponse, Response
from datetime import datetime
import logging

from config.site_options import DEFAULT_FORM, get_form_options_for_frontend
from models.website import FormState
from models.workspace import EditRequest, ImageInfo, WorkspaceResponse
from services.splice_service import to_data_uri
from services.workspace_service import Workspace, get_workspace

router = APIRouter(prefix="/api", tags=["Website Builder"])
logger = logging.getLogger(__name__)


def build_workspace_response(workspace: Workspace) -> WorkspaceResponse:
    state = workspace.state
    return WorkspaceResponse(
        artifacts=state.artifacts,
        images=[ImageInfo(file_name=img.file_name, alt_text=img.alt_text) for img in state.images],
        views=workspace.available_views(),
        is_loading=state.is_loading,
        loading_message=state.loading_message,
        error=state.error,
    )


def workspace_json(workspace: Workspace) -> dict:
    return build_workspace_response(workspace).model_dump(by_alias=True)


def raise_on_error(workspace: Workspace) -> None:
    if workspace.state.error:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=workspace.state.error)


@router.get("/options")
async def get_form_options():
    """Get the selectable form options for the frontend."""
    return {
        "options": get_form_options_for_frontend(),
        "timestamp": datetime.now().isoformat()
    }


@router.get("/form/defaults")
async def get_form_defaults():
    """Initial values of the website specification form."""
    return DEFAULT_FORM


@router.post("/generate")
async def generate_website(
    form: FormState,
    workspace: Workspace = Depends(get_workspace)
):
    """
    Generates a website from the submitted specification, including images
    when requested, and returns the new workspace.
    """
    logger.info(f"[Generate] Request for '{form.title}' ({form.type.value})")
    await workspace.submit(form)
    raise_on_error(workspace)
    return workspace_json(workspace)


@router.post("/regenerate")
async def regenerate_website(workspace: Workspace = Depends(get_workspace)):
    """
    Reruns the generation with the last submitted form. The previous result is
    discarded even if the new attempt fails.
    """
    try:
        await workspace.regenerate()
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    raise_on_error(workspace)
    return workspace_json(workspace)


@router.get("/workspace")
async def get_current_workspace(workspace: Workspace = Depends(get_workspace)):
    """Current artifacts, image list, available views and loading/error state."""
    return workspace_json(workspace)


@router.get("/preview", response_class=HTMLResponse)
async def get_preview(workspace: Workspace = Depends(get_workspace)):
    """Standalone preview document with images embedded as data URIs."""
    return HTMLResponse(content=workspace.current_preview_document())


@router.put("/artifacts/{field}")
async def edit_artifact(
    field: str,
    request: EditRequest,
    workspace: Workspace = Depends(get_workspace)
):
    """Replace one generated file (html, css, js or serverCode) in place."""
    try:
        workspace.edit(field, request.value)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return workspace_json(workspace)


@router.get("/images")
async def get_images(workspace: Workspace = Depends(get_workspace)):
    """Generated images with their alt text, embedded as data URIs."""
    images = [
        ImageInfo(file_name=img.file_name, alt_text=img.alt_text, data_uri=to_data_uri(img))
        for img in workspace.state.images
    ]
    return {"images": [img.model_dump(by_alias=True) for img in images]}


@router.get("/download")
async def download_website(workspace: Workspace = Depends(get_workspace)):
    """
    Download the generated website as a ZIP file
    """
    try:
        filename, blob = await workspace.build_archive()
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Archive download error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build the website archive"
        )

    return Response(
        content=blob,
        media_type=workspace.export_service.get_content_type(filename),
        headers={"Content-Disposition": workspace.export_service.get_content_disposition(filename)}
    )
