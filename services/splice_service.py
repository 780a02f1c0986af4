"""
Image splicing for SiteCraft

Rewrites ``src`` references to generated images, either as embedded data URIs
for the live preview or as relative ``assets/`` paths for the archive. Matching
is plain text: a reference is rewritten only when its quoted value equals the
asset's file name. Unmatched assets are left alone. When two assets share a
file name, both renditions use the later one.
"""
import base64
import re
from typing import Dict, Iterable, List, Tuple

from config.settings import IMAGE_MIME_TYPE
from models.website import ImageAsset

ASSETS_DIR = "assets"


def _src_pattern(file_name: str) -> "re.Pattern[str]":
    return re.compile(r"""src=["']""" + re.escape(file_name) + r"""["']""")


def _replace_src(html: str, file_name: str, new_value: str) -> str:
    replacement = f'src="{new_value}"'
    return _src_pattern(file_name).sub(lambda _: replacement, html)


def _last_per_file_name(assets: Iterable[ImageAsset]) -> List[ImageAsset]:
    return list({asset.file_name: asset for asset in assets}.values())


def to_data_uri(asset: ImageAsset, mime_type: str = IMAGE_MIME_TYPE) -> str:
    encoded = base64.b64encode(asset.data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def asset_path(file_name: str) -> str:
    return f"{ASSETS_DIR}/{file_name}"


def splice_for_preview(html: str, assets: Iterable[ImageAsset], mime_type: str = IMAGE_MIME_TYPE) -> str:
    for asset in _last_per_file_name(assets):
        html = _replace_src(html, asset.file_name, to_data_uri(asset, mime_type))
    return html


def splice_for_archive(html: str, assets: Iterable[ImageAsset]) -> Tuple[str, Dict[str, bytes]]:
    """
    Point image references at ``assets/<fileName>`` and collect the payloads
    to write at those paths. A repeated file name keeps the later payload.
    """
    files: Dict[str, bytes] = {}
    for asset in _last_per_file_name(assets):
        path = asset_path(asset.file_name)
        files[path] = asset.data
        html = _replace_src(html, asset.file_name, path)
    return html, files
