"""
Tests for the workspace: state transitions, preview, editing, regeneration
and the end-to-end generate -> download flow.
"""

from __future__ import annotations

import asyncio
import io
import zipfile

import pytest

from conftest import make_client, sleepy_images
from models.workspace import WorkspaceState
from services import workspace_service as ws
from services.splice_service import to_data_uri


def read_zip(blob: bytes) -> dict:
    with zipfile.ZipFile(io.BytesIO(blob)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


class TestTransitions:

    def test_submit_clears_previous_result(self, form_state, artifacts, logo_asset):
        state = WorkspaceState(artifacts=artifacts, images=[logo_asset], error="old error")

        new_state = ws.submit(state, form_state)

        assert new_state.form == form_state
        assert new_state.artifacts is None
        assert new_state.images == []
        assert new_state.error is None
        assert new_state.is_loading
        assert new_state.loading_message == ws.BUILDING_MESSAGE
        # Snapshots are never mutated in place
        assert state.artifacts is artifacts

    def test_images_requested_updates_message(self):
        state = ws.images_requested(WorkspaceState(is_loading=True), 3)
        assert state.loading_message == "Generating 3 images..."

    def test_generation_failed_drops_images(self, artifacts, logo_asset):
        state = WorkspaceState(artifacts=artifacts, images=[logo_asset])

        failed = ws.generation_failed(state, "boom")

        assert failed.images == []
        assert failed.error == "boom"
        assert failed.artifacts is artifacts

    def test_finish_loading(self):
        state = ws.finish_loading(WorkspaceState(is_loading=True, loading_message="Building"))
        assert not state.is_loading
        assert state.loading_message == ""

    def test_edit_field_replaces_one_field(self, artifacts, logo_asset):
        state = WorkspaceState(artifacts=artifacts, images=[logo_asset])

        edited = ws.edit_field(state, "css", "h1 { color: red; }")

        assert edited.artifacts.css == "h1 { color: red; }"
        assert edited.artifacts.html == artifacts.html
        assert edited.artifacts.js == artifacts.js
        assert edited.images == [logo_asset]
        assert state.artifacts.css == artifacts.css

    def test_edit_server_code_by_wire_name(self, artifacts):
        state = WorkspaceState(artifacts=artifacts)

        edited = ws.edit_field(state, "serverCode", "<?php echo 1;")

        assert edited.artifacts.server_code == "<?php echo 1;"

    def test_edit_unknown_field(self, artifacts):
        with pytest.raises(ValueError):
            ws.edit_field(WorkspaceState(artifacts=artifacts), "imagePrompts", "[]")

    def test_edit_without_artifacts(self):
        with pytest.raises(LookupError):
            ws.edit_field(WorkspaceState(), "html", "<p></p>")


class TestSubmit:

    def test_text_only_generation(self, workspace_factory, form_state, artifacts_payload):
        client = make_client(artifacts_payload)
        workspace = workspace_factory(client)

        state = asyncio.run(workspace.submit(form_state))

        assert state.error is None
        assert state.artifacts.html == artifacts_payload["html"]
        assert state.images == []
        assert not state.is_loading
        client.models.generate_images.assert_not_called()

    def test_image_prompts_ignored_when_flag_off(self, workspace_factory, form_state, image_payload):
        client = make_client(image_payload)
        workspace = workspace_factory(client)

        state = asyncio.run(workspace.submit(form_state))

        assert len(state.artifacts.image_prompts) == 1
        assert state.images == []
        client.models.generate_images.assert_not_called()

    def test_k_prompts_give_k_aligned_assets(self, workspace_factory, image_form_state, artifacts_payload):
        names = ["logo", "banner", "extra-1", "extra-2"]
        payload = dict(artifacts_payload, imagePrompts=[
            {"fileName": f"{n}.jpg", "prompt": n, "altText": n.title()} for n in names
        ])
        # Earlier prompts complete later
        delays = {n: 0.05 * (len(names) - i) for i, n in enumerate(names)}
        client = make_client(payload, image_side_effect=sleepy_images(delays))
        workspace = workspace_factory(client)

        state = asyncio.run(workspace.submit(image_form_state))

        assert client.models.generate_images.call_count == len(names)
        assert [img.file_name for img in state.images] == [f"{n}.jpg" for n in names]
        assert [img.data for img in state.images] == [n.encode("utf-8") for n in names]

    def test_one_image_failure_leaves_no_assets(self, workspace_factory, image_form_state, artifacts_payload):
        payload = dict(artifacts_payload, imagePrompts=[
            {"fileName": "a.jpg", "prompt": "a", "altText": "A"},
            {"fileName": "b.jpg", "prompt": "b", "altText": "B"},
            {"fileName": "c.jpg", "prompt": "c", "altText": "C"},
        ])
        client = make_client(payload, image_side_effect=sleepy_images({"a": 0.0, "c": 0.0}, fail_on="b"))
        workspace = workspace_factory(client)

        state = asyncio.run(workspace.submit(image_form_state))

        assert state.images == []
        assert state.error.startswith(ws.ERROR_PREFIX)
        assert "quota exceeded" in state.error
        # Text artifacts from the successful first step are kept
        assert state.artifacts is not None
        assert not state.is_loading

    def test_text_failure_shows_no_artifacts(self, workspace_factory, form_state):
        client = make_client(text_error=TimeoutError("deadline exceeded"))
        workspace = workspace_factory(client)

        state = asyncio.run(workspace.submit(form_state))

        assert state.artifacts is None
        assert state.images == []
        assert state.error == ws.ERROR_PREFIX + "deadline exceeded"
        assert not state.is_loading
        assert workspace.current_preview_document() == ""

    def test_regenerate_without_submission(self, workspace_factory):
        workspace = workspace_factory(make_client({}))

        with pytest.raises(LookupError):
            asyncio.run(workspace.regenerate())

    def test_regenerate_failure_clears_previous_result(
        self, workspace_factory, image_form_state, image_payload
    ):
        # Known fragile behavior: the prior result is dropped before the new attempt finishes
        client = make_client(image_payload)
        workspace = workspace_factory(client)
        first = asyncio.run(workspace.submit(image_form_state))
        assert first.artifacts is not None
        assert len(first.images) == 1

        client.models.generate_content.side_effect = RuntimeError("model overloaded")
        state = asyncio.run(workspace.regenerate())

        assert state.artifacts is None
        assert state.images == []
        assert "model overloaded" in state.error
        assert state.form == image_form_state

    def test_regenerate_reuses_last_form(self, workspace_factory, form_state, artifacts_payload):
        client = make_client(artifacts_payload)
        workspace = workspace_factory(client)
        asyncio.run(workspace.submit(form_state))

        asyncio.run(workspace.regenerate())

        assert client.models.generate_content.call_count == 2
        prompts = [c.kwargs["contents"] for c in client.models.generate_content.call_args_list]
        assert prompts[0] == prompts[1]


class TestPreview:

    def test_document_inlines_css_html_and_js(self, workspace_factory, form_state, artifacts_payload):
        workspace = workspace_factory(make_client(artifacts_payload))
        asyncio.run(workspace.submit(form_state))

        document = workspace.current_preview_document()

        assert "<style>body { margin: 0; }</style>" in document
        assert "<h1>Hello</h1>" in document
        assert "<script>console.log('ready');</script>" in document
        assert document.index("<style>") < document.index("<h1>Hello</h1>") < document.index("<script>console")

    def test_edits_show_up_immediately(self, workspace_factory, form_state, artifacts_payload):
        workspace = workspace_factory(make_client(artifacts_payload))
        asyncio.run(workspace.submit(form_state))
        before = workspace.current_preview_document()

        workspace.edit("css", "body { background: black; }")

        after = workspace.current_preview_document()
        assert before != after
        assert "<style>body { background: black; }</style>" in after

    def test_views(self, workspace_factory, image_form_state, image_payload):
        payload = dict(image_payload, serverCode="<?php", serverFileName="backend.php")
        workspace = workspace_factory(make_client(payload))
        assert workspace.available_views() == []

        asyncio.run(workspace.submit(image_form_state))

        assert workspace.available_views() == ["Preview", "HTML", "CSS", "JS", "backend.php", "Images"]


class TestEndToEnd:

    def test_plain_site_archive(self, workspace_factory, form_state, artifacts_payload):
        workspace = workspace_factory(make_client(artifacts_payload))
        asyncio.run(workspace.submit(form_state))

        filename, blob = asyncio.run(workspace.build_archive())

        assert filename == "my-awesome-portfolio-project.zip"
        files = read_zip(blob)
        assert sorted(files) == ["index.html", "script.js", "style.css"]
        assert not any(name.startswith("assets/") for name in files)

    def test_image_site_archive_and_preview(self, workspace_factory, image_form_state, image_payload):
        client = make_client(image_payload, images={"a minimal logo": b"\xff\xd8\xfflogo"})
        workspace = workspace_factory(client)
        asyncio.run(workspace.submit(image_form_state))

        _, blob = asyncio.run(workspace.build_archive())
        files = read_zip(blob)

        assert files["assets/logo.png"] == b"\xff\xd8\xfflogo"
        assert b'<img src="assets/logo.png" alt="Logo">' in files["index.html"]

        document = workspace.current_preview_document()
        data_uri = to_data_uri(workspace.state.images[0])
        assert data_uri.startswith("data:image/jpeg;base64,")
        assert f'<img src="{data_uri}" alt="Logo">' in document
        assert "assets/logo.png" not in document

    def test_download_without_generation(self, workspace_factory):
        workspace = workspace_factory(make_client({}))

        with pytest.raises(LookupError):
            asyncio.run(workspace.build_archive())
