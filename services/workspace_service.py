"""
Workspace service for SiteCraft

Holds the current generation (text artifacts + image assets) behind the live
preview, the inline editors and the archive download. State changes go through
the transition functions below; each returns a new WorkspaceState.
"""
from typing import List, Optional, Tuple
import logging

from config.settings import initialize_gemini
from models.website import FormState, GeneratedArtifacts, ImageAsset
from models.workspace import WorkspaceState
from services.composer_service import compose
from services.export_service import ExportService
from services.generation_service import GenerationService, SiteGenerationError
from services.splice_service import splice_for_archive, splice_for_preview

logger = logging.getLogger(__name__)

BUILDING_MESSAGE = "Building your website..."
ERROR_PREFIX = "Failed to generate website. Please check your prompt or try again. "

# Editable text fields, keyed by both attribute and wire name
EDITABLE_FIELDS = {
    "html": "html",
    "css": "css",
    "js": "js",
    "server_code": "server_code",
    "serverCode": "server_code",
}

PREVIEW_TEMPLATE = """
<html>
  <head>
    <style>{css}</style>
  </head>
  <body>
    {html}
    <script>{js}</script>
  </body>
</html>
"""


# ==================== State transitions ====================

def submit(state: WorkspaceState, form: FormState) -> WorkspaceState:
    """Start a generation: previous artifacts and images are dropped right away."""
    return WorkspaceState(
        form=form,
        artifacts=None,
        images=[],
        is_loading=True,
        loading_message=BUILDING_MESSAGE,
        error=None,
    )


def generation_succeeded(state: WorkspaceState, artifacts: GeneratedArtifacts) -> WorkspaceState:
    return state.model_copy(update={"artifacts": artifacts})


def images_requested(state: WorkspaceState, count: int) -> WorkspaceState:
    return state.model_copy(update={"loading_message": f"Generating {count} images..."})


def images_succeeded(state: WorkspaceState, images: List[ImageAsset]) -> WorkspaceState:
    return state.model_copy(update={"images": list(images)})


def generation_failed(state: WorkspaceState, message: str) -> WorkspaceState:
    """Record the failure. Any partial image set is discarded."""
    return state.model_copy(update={"images": [], "error": message})


def finish_loading(state: WorkspaceState) -> WorkspaceState:
    return state.model_copy(update={"is_loading": False, "loading_message": ""})


def edit_field(state: WorkspaceState, field: str, value: str) -> WorkspaceState:
    """Replace exactly one top-level text field of the current artifacts."""
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown field '{field}'. Editable fields: html, css, js, serverCode")
    if state.artifacts is None:
        raise LookupError("There is no generated website to edit")

    artifacts = state.artifacts.model_copy(update={EDITABLE_FIELDS[field]: value})
    return state.model_copy(update={"artifacts": artifacts})


# ==================== Workspace ====================

class Workspace:
    def __init__(self, generation_service: GenerationService, export_service: Optional[ExportService] = None):
        self.generation_service = generation_service
        self.export_service = export_service or ExportService()
        self.state = WorkspaceState()

    async def submit(self, form: FormState) -> WorkspaceState:
        """
        Run the full pipeline for a form snapshot: compose, generate the text
        artifacts, then the images when requested. Failures end up in
        ``state.error``; loading is cleared on every path.
        """
        request = compose(form)
        self.state = submit(self.state, form)
        logger.info(f"Generation started for '{form.title}'")

        try:
            artifacts = await self.generation_service.generate(request)
            self.state = generation_succeeded(self.state, artifacts)

            if form.generate_images and artifacts.image_prompts:
                self.state = images_requested(self.state, len(artifacts.image_prompts))
                images = await self.generation_service.generate_images(artifacts.image_prompts)
                self.state = images_succeeded(self.state, images)

            logger.info(f"Generation finished for '{form.title}' with {len(self.state.images)} images")
        except SiteGenerationError as e:
            logger.error(f"Generation failed for '{form.title}': {str(e)}", exc_info=True)
            self.state = generation_failed(self.state, ERROR_PREFIX + str(e))
        finally:
            self.state = finish_loading(self.state)

        return self.state

    async def regenerate(self) -> WorkspaceState:
        """Rerun the pipeline with the last submitted form. The old result is not kept."""
        if self.state.form is None:
            raise LookupError("Nothing to regenerate. Submit the form first")
        return await self.submit(self.state.form)

    def edit(self, field: str, value: str) -> WorkspaceState:
        self.state = edit_field(self.state, field, value)
        logger.debug(f"Edited field '{field}' ({len(value)} chars)")
        return self.state

    def current_preview_document(self) -> str:
        """Standalone preview document, rebuilt from the current state on every call."""
        artifacts = self.state.artifacts
        if artifacts is None or not artifacts.html:
            return ""

        html = splice_for_preview(artifacts.html, self.state.images)
        return PREVIEW_TEMPLATE.format(css=artifacts.css, html=html, js=artifacts.js)

    def available_views(self) -> List[str]:
        artifacts = self.state.artifacts
        if artifacts is None:
            return []

        views = ["Preview", "HTML", "CSS", "JS"]
        if artifacts.server_file_name:
            views.append(artifacts.server_file_name)
        if self.state.images:
            views.append("Images")
        return views

    async def build_archive(self) -> Tuple[str, bytes]:
        """Return the download file name and the zip blob for the current state."""
        artifacts = self.state.artifacts
        if artifacts is None:
            raise LookupError("There is no generated website to download")

        archive_html, asset_files = splice_for_archive(artifacts.html, self.state.images)
        blob = await self.export_service.build_archive(artifacts, archive_html, asset_files)
        return self.export_service.get_archive_filename(self.state.form.title), blob


# Global workspace instance - created on first use
workspace = None

def get_workspace() -> Workspace:
    """Get or create the workspace instance"""
    global workspace
    if workspace is None:
        workspace = Workspace(GenerationService(initialize_gemini()))
    return workspace
