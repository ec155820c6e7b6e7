# menu_extract/ocr_facade.py
"""
OCR façade — photographed menu → TextBlock for the extractor.

Sits outside the pipeline: the extractor never touches images. This module
owns Tesseract setup, Pillow preprocessing and language selection.

Public API:
- configure_tesseract_from_env()         TESSERACT_CMD → pytesseract
- load_image(data) -> PIL.Image          bytes → upright RGB image
- preprocess_image(img) -> PIL.Image     downscale, grayscale, autocontrast, sharpen
- pick_language() -> "tam+eng" | "eng"   Tamil model when installed
- ocr_image(img) -> TextBlock            text lines + mean word confidence
- health() -> dict                       tesseract cmd / version / languages
"""

from __future__ import annotations

import io
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytesseract
from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

from .errors import OcrError
from .menu_types import TextBlock

log = logging.getLogger(__name__)

MAX_WIDTH = 2000
DEFAULT_LANG = "tam+eng"
FALLBACK_LANG = "eng"
OCR_CONFIG = "--oem 1 --psm 6"


def configure_tesseract_from_env() -> None:
    cmd = os.environ.get("TESSERACT_CMD")
    if cmd and os.path.isfile(cmd):
        pytesseract.pytesseract.tesseract_cmd = cmd


def _tesseract_cmd() -> str:
    """Locate the tesseract executable on disk."""
    cmd = getattr(pytesseract.pytesseract, "tesseract_cmd", "") or ""
    if cmd and (os.path.isfile(cmd) or shutil.which(cmd)):
        return shutil.which(cmd) or cmd
    return shutil.which("tesseract") or ""


# =============================
# Image helpers
# =============================

def load_image(data: bytes) -> Image.Image:
    """Decode uploaded bytes, apply EXIF orientation, return RGB."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise OcrError(f"unreadable image: {e}") from e
    return ImageOps.exif_transpose(img).convert("RGB")


def preprocess_image(img: Image.Image, max_width: int = MAX_WIDTH) -> Image.Image:
    out = img
    if out.width > max_width:
        height = round(out.height * max_width / out.width)
        out = out.resize((max_width, height), Image.LANCZOS)
    if out.mode != "L":
        out = ImageOps.grayscale(out)
    out = ImageOps.autocontrast(out)
    return out.filter(ImageFilter.SHARPEN)


# =============================
# Language selection
# =============================

def installed_languages() -> List[str]:
    try:
        return sorted(pytesseract.get_languages(config=""))
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as e:
        log.warning("Could not list tesseract languages: %s", e)
        return []


def pick_language(requested: Optional[str] = None) -> str:
    """
    TESSERACT_LANG (or `requested`) when every part is installed, else English.
    """
    wanted = requested or os.environ.get("TESSERACT_LANG") or DEFAULT_LANG
    have = set(installed_languages())
    missing = [p for p in wanted.split("+") if p not in have]
    if not missing:
        return wanted
    log.warning("Tesseract language(s) %s not installed; falling back to '%s'",
                ",".join(missing), FALLBACK_LANG)
    return FALLBACK_LANG


# =============================
# OCR
# =============================

def _lines_and_confidence(data: Dict[str, List[Any]]) -> Tuple[List[str], Optional[float]]:
    """Rebuild text lines from image_to_data output; mean confidence of real words."""
    lines: Dict[Tuple[int, int, int], List[str]] = {}
    order: List[Tuple[int, int, int]] = []
    confs: List[float] = []

    for i, word in enumerate(data.get("text", [])):
        word = (word or "").strip()
        if not word:
            continue
        try:
            conf = float(data["conf"][i])
        except (KeyError, IndexError, TypeError, ValueError):
            conf = -1.0
        if conf >= 0:
            confs.append(conf)
        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        if key not in lines:
            lines[key] = []
            order.append(key)
        lines[key].append(word)

    mean = round(sum(confs) / len(confs), 1) if confs else None
    return [" ".join(lines[k]) for k in order], mean


def ocr_image(img: Image.Image, lang: Optional[str] = None) -> TextBlock:
    configure_tesseract_from_env()
    lang = lang or pick_language()
    prepared = preprocess_image(img)
    try:
        data = pytesseract.image_to_data(
            prepared, lang=lang, config=OCR_CONFIG, output_type=pytesseract.Output.DICT
        )
    except pytesseract.TesseractNotFoundError as e:
        raise OcrError("tesseract is not installed or TESSERACT_CMD is wrong") from e
    except pytesseract.TesseractError as e:
        raise OcrError(f"tesseract failed: {e}") from e

    lines, conf = _lines_and_confidence(data)
    log.info("OCR (%s): %d lines, mean confidence %s", lang, len(lines), conf)
    return TextBlock("\n".join(lines), ocr_confidence=conf)


def health() -> Dict[str, Any]:
    """OCR engine health: resolved executable, version, installed languages."""
    configure_tesseract_from_env()
    cmd = _tesseract_cmd()
    version: Optional[str] = None
    languages: List[str] = []
    if cmd:
        try:
            version = str(pytesseract.get_tesseract_version())
            languages = installed_languages()
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as e:
            log.warning("tesseract health check failed: %s", e)

    return {
        "engine": "tesseract",
        "tesseract": {
            "cmd": cmd,
            "version": version,
            "found_on_disk": bool(cmd and Path(cmd).exists()),
            "languages": languages,
            "tamil": "tam" in languages,
        },
    }
