# portal/routes_extract.py
"""
Menu extraction API.

  POST /api/menu/extract         JSON {text} | {elements} | {html}
  POST /api/menu/extract-image   multipart field "file" (jpg / png / webp / tiff)

Both answer {"ok": true, "menu": {...ParsedMenu...}} or
{"ok": false, "error": "..."} with a 4xx/5xx status.
"""

import logging
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request

from menu_extract import ocr_facade
from menu_extract.contracts import parse_extract_payload
from menu_extract.errors import ContractViolation, OcrError
from menu_extract.html_elements import elements_from_html

log = logging.getLogger(__name__)

extract_bp = Blueprint("extract", __name__)

ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "tif", "tiff"}


def allowed_image(filename: str) -> bool:
    return Path(filename).suffix.lower().lstrip(".") in ALLOWED_IMAGE_EXTENSIONS


def _extractor():
    return current_app.extensions["menu_extractor"]


def _too_long(text: str) -> bool:
    return len(text) > current_app.config["MENU_EXTRACT_MAX_TEXT_CHARS"]


@extract_bp.post("/api/menu/extract")
def extract_menu():
    payload = request.get_json(silent=True)
    if payload is None:
        return jsonify({"ok": False, "error": "Expected JSON payload"}), 400

    kind, value, err = parse_extract_payload(payload)
    if err:
        return jsonify({"ok": False, "error": err}), 400

    if kind in ("text", "html") and _too_long(value):
        return jsonify({"ok": False, "error": f"'{kind}' exceeds MENU_EXTRACT_MAX_TEXT_CHARS"}), 413

    try:
        if kind == "text":
            menu = _extractor().extract(text=value)
        else:
            elements = elements_from_html(value) if kind == "html" else value
            menu = _extractor().extract(elements=elements)
    except ContractViolation as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    except Exception as e:
        log.exception("extraction failed")
        return jsonify({"ok": False, "error": f"Server error during extraction: {e}"}), 500

    return jsonify({"ok": True, "source": kind, "menu": menu.to_dict()})


@extract_bp.post("/api/menu/extract-image")
def extract_menu_image():
    if "file" not in request.files:
        return jsonify({"ok": False, "error": "No file field 'file' provided"}), 400
    file = request.files["file"]
    if not file.filename:
        return jsonify({"ok": False, "error": "Empty filename"}), 400
    if not allowed_image(file.filename):
        return jsonify({"ok": False, "error": "Unsupported file type. Allowed: jpg, jpeg, png, webp, tiff"}), 400

    data = file.read()
    if not data:
        return jsonify({"ok": False, "error": "Empty file"}), 400

    try:
        img = ocr_facade.load_image(data)
    except OcrError as e:
        return jsonify({"ok": False, "error": str(e)}), 400

    try:
        block = ocr_facade.ocr_image(img)
    except OcrError as e:
        log.warning("OCR failed for %s: %s", file.filename, e)
        return jsonify({"ok": False, "error": str(e)}), 503

    if _too_long(block.text):
        return jsonify({"ok": False, "error": "OCR text exceeds MENU_EXTRACT_MAX_TEXT_CHARS"}), 413

    menu = _extractor().extract(text=block)
    return jsonify({
        "ok": True,
        "source": "image",
        "ocr": {"confidence": block.ocr_confidence, "chars": len(block.text)},
        "menu": menu.to_dict(),
    })
