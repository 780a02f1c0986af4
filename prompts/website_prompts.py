# Website Prompt Templates for Site Generation
# Sections are appended conditionally by services.composer_service

STYLESHEET_FILE = "style.css"
SCRIPT_FILE = "script.js"

BASE_PROMPT = """You are an expert web developer. Create a full, complete, and functional website based on the following specifications.
The HTML file must be a complete document, including <!DOCTYPE html>, <html>, <head>, and <body> tags.
The <head> must link to the stylesheet named "{stylesheet}" (<link rel="stylesheet" href="{stylesheet}">) and the script file named "{script}" (<script src="{script}" defer></script>).
Generate all code (HTML, CSS, JavaScript) as separate, complete files. Never return fragments.

Specifications:
- Website Title: {title}
- Meta Description: {description}
- Website Type: {site_type}
- Required Features: {features}
- Custom Instructions: {custom_prompt}
"""

DATABASE_SECTION = """
- This website requires a backend and a {engine} database.
- Generate appropriate backend server code. Choose a suitable language and framework (e.g., Node.js with Express, or PHP).
- Return the backend code in "serverCode" and its file name in "serverFileName".
- The backend should handle features like a contact form if requested.
- Database Connection Details (for the generated code):
    - Host: {host}
    - User: {username}
    - Password: {password}
    - Database Name: {name}
- Database Table Details: {table_details}
"""

DEFAULT_TABLE_DETAILS = "Create tables as needed based on the website features."

IMAGE_SECTION = """
- The website also requires generated images.
- In the JSON output, provide an "imagePrompts" array.
- For each requested image, create an object in the array with "fileName", "prompt", and "altText".
- The "fileName" should be a unique name like "logo.png", "banner.jpg", or "feature-image-1.png", and MUST be used in the 'src' attribute of the <img> tags in the generated HTML.
- The "prompt" should be a detailed, creative prompt suitable for an advanced text-to-image generation model.
- The "altText" should be a descriptive accessibility text for the image.

Image Requirements:
- Generate a prompt for a Logo based on the concept: "{logo_prompt}"
- Generate a prompt for a Banner based on the concept: "{banner_prompt}"
- Generate {image_count} additional image prompts. Their style should be: "{icon_style}".
- Ensure the generated HTML includes <img> tags with the correct corresponding file names in the src attribute (e.g., <img src="logo.png" alt="...">).
"""

# Gemini response schema: the text model must answer with exactly this shape
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "html": {"type": "STRING", "description": "The full HTML code for index.html."},
        "css": {"type": "STRING", "description": "The full CSS code for style.css."},
        "js": {"type": "STRING", "description": "The full JavaScript code for script.js."},
        "serverCode": {"type": "STRING", "description": "The backend server code. Empty if no DB is needed."},
        "serverFileName": {
            "type": "STRING",
            "description": 'The file name for the server code, e.g., "server.js" or "backend.php".',
        },
        "imagePrompts": {
            "type": "ARRAY",
            "description": "An array of detailed prompts for generating images.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "fileName": {"type": "STRING", "description": "The intended filename for the image, e.g., 'logo.png'."},
                    "prompt": {"type": "STRING", "description": "A detailed, descriptive prompt for the image generation model."},
                    "altText": {"type": "STRING", "description": "Descriptive alt text for the image."},
                },
                "required": ["fileName", "prompt", "altText"],
            },
        },
    },
    "required": ["html", "css", "js"],
}
