# config/settings.py

import os
import logging

from dotenv import load_dotenv
from google import genai
from google.genai.types import HttpOptions

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Configuration constants
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
IMAGEN_MODEL = os.getenv("IMAGEN_MODEL", "imagen-3.0-generate-002")
IMAGE_MIME_TYPE = os.getenv("IMAGE_MIME_TYPE", "image/jpeg")
GENERATION_TIMEOUT = int(os.getenv("GENERATION_TIMEOUT", "300"))  # seconds, enforced by the transport

STATIC_DIR = os.getenv("STATIC_DIR", "dist")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_FILE = os.getenv("LOG_FILE", "sitecraft.log")


def initialize_gemini() -> genai.Client:
    """Create the Gemini client used for both text and image generation."""
    if not GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY not found in environment variables")

    logger.info(f"Initializing Gemini client (text: {GEMINI_MODEL}, images: {IMAGEN_MODEL})")
    return genai.Client(
        api_key=GEMINI_API_KEY,
        http_options=HttpOptions(timeout=GENERATION_TIMEOUT * 1000),
    )
