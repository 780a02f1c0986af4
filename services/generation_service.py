"""
Generation service for SiteCraft: text and image calls against Gemini
"""
from typing import List, Optional
import asyncio
import json
import logging

from google.genai import types
from pydantic import ValidationError

from config.settings import GEMINI_MODEL, IMAGEN_MODEL, IMAGE_MIME_TYPE
from models.website import GenerationRequest, GeneratedArtifacts, ImageAsset, ImagePrompt

logger = logging.getLogger(__name__)


class SiteGenerationError(Exception):
    """Base class for failures of the generation stage."""


class GenerationError(SiteGenerationError):
    """Transport failure or unusable response from the text model."""


class ImageGenerationError(SiteGenerationError):
    """One of the image requests of a batch failed."""


class GenerationService:
    def __init__(self, client, text_model: str = GEMINI_MODEL, image_model: str = IMAGEN_MODEL,
                 image_mime_type: str = IMAGE_MIME_TYPE):
        self.client = client
        self.text_model = text_model
        self.image_model = image_model
        self.image_mime_type = image_mime_type

    async def generate(self, request: GenerationRequest) -> GeneratedArtifacts:
        """
        Run one text generation constrained to the request's response schema.
        Any failure is terminal for this call.
        """
        logger.info(f"Starting website generation with model: {self.text_model}")
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=request.response_schema,
        )

        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.text_model,
                contents=request.prompt,
                config=config,
            )
        except Exception as e:
            logger.error(f"Error calling text model {self.text_model}: {str(e)}")
            raise GenerationError(str(e)) from e

        text = getattr(response, "text", None)
        if not text:
            logger.error("No text found in Gemini response")
            raise GenerationError("Empty response from model")

        return parse_artifacts(text)

    async def generate_images(self, prompts: List[ImagePrompt]) -> List[ImageAsset]:
        """
        Generate one image per descriptor, all requests in flight at once.

        The result is index-aligned with ``prompts``. If any request fails the
        whole batch fails and no asset is returned.
        """
        logger.info(f"Generating {len(prompts)} images with model: {self.image_model}")
        tasks = [self._generate_image(p) for p in prompts]
        try:
            images = await asyncio.gather(*tasks)
        except ImageGenerationError:
            raise
        except Exception as e:
            logger.error(f"Image batch failed: {str(e)}")
            raise ImageGenerationError(str(e)) from e

        logger.info(f"Successfully generated {len(images)} images")
        return list(images)

    async def _generate_image(self, image_prompt: ImagePrompt) -> ImageAsset:
        config = types.GenerateImagesConfig(
            number_of_images=1,
            output_mime_type=self.image_mime_type,
        )
        response = await asyncio.to_thread(
            self.client.models.generate_images,
            model=self.image_model,
            prompt=image_prompt.prompt,
            config=config,
        )

        data = _first_image_bytes(response)
        if not data:
            logger.error(f"No image returned for '{image_prompt.file_name}'")
            raise ImageGenerationError(f"No image returned for {image_prompt.file_name}")

        logger.debug(f"Generated '{image_prompt.file_name}' ({len(data)} bytes)")
        return ImageAsset(file_name=image_prompt.file_name, alt_text=image_prompt.alt_text, data=data)


def parse_artifacts(text: str) -> GeneratedArtifacts:
    """Parse the model's JSON answer. No repair is attempted."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Model response is not valid JSON: {str(e)}")
        raise GenerationError(f"Model response is not valid JSON: {e.msg}") from e

    if not isinstance(payload, dict):
        raise GenerationError("Model response is not a JSON object")

    try:
        artifacts = GeneratedArtifacts.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Model response does not match the schema: {str(e)}")
        raise GenerationError("Model response does not match the expected schema") from e

    logger.info(
        f"Parsed artifacts: html={len(artifacts.html)} css={len(artifacts.css)} "
        f"js={len(artifacts.js)} chars, {len(artifacts.image_prompts)} image prompts"
    )
    return artifacts


def _first_image_bytes(response) -> Optional[bytes]:
    generated = getattr(response, "generated_images", None)
    if not generated:
        return None
    image = generated[0].image
    if image is None:
        return None
    return image.image_bytes
