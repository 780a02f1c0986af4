"""
Shared test fixtures and configuration.
"""

import json
import os
import time
from types import SimpleNamespace
from typing import Callable, Dict, Optional
from unittest.mock import MagicMock

import pytest

# Keep test runs from writing a log file into the working directory
os.environ.setdefault("LOG_FILE", "")

from models.website import FormState, GeneratedArtifacts, ImageAsset  # noqa: E402
from services.generation_service import GenerationService  # noqa: E402
from services.workspace_service import Workspace  # noqa: E402


SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <link rel="stylesheet" href="style.css">
  <script src="script.js" defer></script>
</head>
<body>
  <img src="logo.png" alt="Logo">
  <h1>Hello</h1>
</body>
</html>"""


def text_response(payload) -> SimpleNamespace:
    """Shape of a generate_content response as far as the service reads it."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return SimpleNamespace(text=text)


def image_response(data: bytes) -> SimpleNamespace:
    return SimpleNamespace(
        generated_images=[SimpleNamespace(image=SimpleNamespace(image_bytes=data))]
    )


def make_client(
    payload=None,
    text_error: Optional[Exception] = None,
    images: Optional[Dict[str, bytes]] = None,
    image_side_effect: Optional[Callable] = None,
) -> MagicMock:
    """
    Build a stand-in for ``genai.Client``. ``images`` maps an image prompt to
    the bytes returned for it.
    """
    client = MagicMock()
    if text_error is not None:
        client.models.generate_content.side_effect = text_error
    else:
        client.models.generate_content.return_value = text_response(payload)

    if image_side_effect is not None:
        client.models.generate_images.side_effect = image_side_effect
    else:
        images = images or {}

        def _generate_images(model, prompt, config):
            return image_response(images.get(prompt, prompt.encode("utf-8")))

        client.models.generate_images.side_effect = _generate_images
    return client


@pytest.fixture
def form_state() -> FormState:
    return FormState(
        title="My Awesome Portfolio",
        description="A personal website to showcase my projects and skills.",
        type="Portfolio",
        features=["Responsive Layout", "Gallery"],
    )


@pytest.fixture
def image_form_state(form_state: FormState) -> FormState:
    return form_state.model_copy(update={"generate_images": True})


@pytest.fixture
def artifacts_payload() -> dict:
    return {
        "html": SAMPLE_HTML,
        "css": "body { margin: 0; }",
        "js": "console.log('ready');",
    }


@pytest.fixture
def image_payload(artifacts_payload: dict) -> dict:
    payload = dict(artifacts_payload)
    payload["imagePrompts"] = [
        {"fileName": "logo.png", "prompt": "a minimal logo", "altText": "Logo"},
    ]
    return payload


@pytest.fixture
def artifacts(artifacts_payload: dict) -> GeneratedArtifacts:
    return GeneratedArtifacts.model_validate(artifacts_payload)


@pytest.fixture
def logo_asset() -> ImageAsset:
    return ImageAsset(file_name="logo.png", alt_text="Logo", data=b"\xff\xd8\xffjpeg-bytes")


@pytest.fixture
def workspace_factory() -> Callable[[MagicMock], Workspace]:
    def _factory(client: MagicMock) -> Workspace:
        return Workspace(GenerationService(client, text_model="test-text", image_model="test-image"))
    return _factory


def sleepy_images(delays: Dict[str, float], fail_on: Optional[str] = None) -> Callable:
    """Image side effect that finishes prompts after the given delays."""
    def _generate_images(model, prompt, config):
        time.sleep(delays.get(prompt, 0))
        if prompt == fail_on:
            raise RuntimeError(f"quota exceeded for {prompt}")
        return image_response(prompt.encode("utf-8"))
    return _generate_images
