import os
import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
import uvicorn

from config.settings import GEMINI_MODEL, IMAGEN_MODEL, STATIC_DIR, HOST, PORT, LOG_FILE
from routes.website import router as website_router

# Configure logging
handlers = [logging.StreamHandler()]
if LOG_FILE:
    handlers.append(logging.FileHandler(LOG_FILE))

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SiteCraft Backend",
    description="AI website builder: form -> Gemini -> HTML/CSS/JS + images -> preview and ZIP",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["content-disposition"]
)

# Include routers
app.include_router(website_router)


@app.on_event("startup")
async def startup_event():
    """Log the configuration on startup."""
    logger.info("✅ SiteCraft Backend started successfully")
    logger.info(f"✅ Text model: {GEMINI_MODEL}")
    logger.info(f"✅ Image model: {IMAGEN_MODEL}")
    logger.info(f"✅ Serving front end from: {os.path.abspath(STATIC_DIR)}")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "model": GEMINI_MODEL,
        "image_model": IMAGEN_MODEL
    }


def resolve_static_path(static_dir: str, full_path: str) -> str:
    """
    Map a request path to a file in the built front end. Unmatched paths, and
    paths escaping the directory, get the entry document.
    """
    root = os.path.realpath(static_dir)
    candidate = os.path.realpath(os.path.join(root, full_path))
    if candidate.startswith(root + os.sep) and os.path.isfile(candidate):
        return candidate
    return os.path.join(root, "index.html")


# Registered last so the API routes above take precedence
@app.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str):
    """Serve the built front end, falling back to index.html for client-side routes."""
    path = resolve_static_path(STATIC_DIR, full_path)
    if not os.path.isfile(path):
        logger.warning(f"Front end entry document not found at {path}")
        raise HTTPException(status_code=404, detail="Front end build not found")
    return FileResponse(path)


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
