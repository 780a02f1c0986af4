"""
Prompt composition for SiteCraft

Turns a submitted form into the single prompt and response schema sent to
the text model.
"""
import copy
import logging

from config.site_options import DATABASE_ENGINE
from models.website import FormState, GenerationRequest
from prompts.website_prompts import (
    BASE_PROMPT,
    DATABASE_SECTION,
    DEFAULT_TABLE_DETAILS,
    IMAGE_SECTION,
    RESPONSE_SCHEMA,
    SCRIPT_FILE,
    STYLESHEET_FILE,
)

logger = logging.getLogger(__name__)


def build_base_section(form: FormState) -> str:
    return BASE_PROMPT.format(
        stylesheet=STYLESHEET_FILE,
        script=SCRIPT_FILE,
        title=form.title,
        description=form.description,
        site_type=form.type.value,
        features=", ".join(form.features),
        custom_prompt=form.custom_prompt or "None",
    )


def build_database_section(form: FormState) -> str:
    return DATABASE_SECTION.format(
        engine=DATABASE_ENGINE,
        host=form.db_host,
        username=form.db_username,
        password=form.db_password,
        name=form.db_name,
        table_details=form.table_details or DEFAULT_TABLE_DETAILS,
    )


def build_image_section(form: FormState) -> str:
    return IMAGE_SECTION.format(
        logo_prompt=form.logo_prompt,
        banner_prompt=form.banner_prompt,
        image_count=form.image_count,
        icon_style=form.icon_style.value,
    )


def compose(form: FormState) -> GenerationRequest:
    """
    Build the generation request for a form snapshot.

    The database and image sections are only appended when their flags are
    set, so unused connection details never reach the model.
    """
    prompt = build_base_section(form)

    if form.need_database:
        prompt += build_database_section(form)

    if form.generate_images:
        prompt += build_image_section(form)

    logger.debug(
        f"Composed prompt for '{form.title}' ({len(prompt)} chars, "
        f"database={form.need_database}, images={form.generate_images})"
    )
    return GenerationRequest(prompt=prompt, response_schema=copy.deepcopy(RESPONSE_SCHEMA))
