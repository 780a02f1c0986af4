"""
Form options for the SiteCraft website builder

Centralized choices and initial values for the website specification form,
served to the frontend so both sides agree on the same lists.
"""

from typing import Any, Dict, List

SITE_TYPES: List[str] = ["Portfolio", "Blog", "E-Commerce", "Landing Page", "Custom"]

FEATURES: List[str] = ["Contact Form", "Admin Panel", "Gallery", "Responsive Layout"]

ICON_STYLES: List[str] = ["Flat", "3D", "Hand-drawn", "Realistic"]

MIN_EXTRA_IMAGES = 0
MAX_EXTRA_IMAGES = 5

DATABASE_ENGINE = "MySQL"

# Initial values shown when the form first loads
DEFAULT_FORM: Dict[str, Any] = {
    "title": "My Awesome Portfolio",
    "description": "A personal website to showcase my projects and skills.",
    "type": "Portfolio",
    "features": ["Responsive Layout"],
    "customPrompt": "",
    "needDatabase": False,
    "dbHost": "localhost",
    "dbUsername": "root",
    "dbPassword": "",
    "dbName": "webapp_db",
    "tableDetails": 'A "projects" table with id, title, description, image_url, and link.',
    "generateImages": False,
    "logoPrompt": 'A modern, minimal logo for a tech company, using the letters "AI".',
    "bannerPrompt": "A vibrant, abstract banner representing data and creativity.",
    "iconStyle": "Flat",
    "imageCount": 2,
}


def get_form_options_for_frontend() -> Dict[str, Any]:
    """
    Get the selectable form options formatted for frontend consumption.

    Returns:
        Dictionary with the site types, features, icon styles and image count bounds
    """
    return {
        "site_types": list(SITE_TYPES),
        "features": list(FEATURES),
        "icon_styles": list(ICON_STYLES),
        "image_count": {"min": MIN_EXTRA_IMAGES, "max": MAX_EXTRA_IMAGES},
        "database_engine": DATABASE_ENGINE,
    }
