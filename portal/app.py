# portal/app.py
"""
Flask front door for the menu extraction pipeline.

Environment (read from .env when present):
  LOG_LEVEL                      logging level, default INFO
  TESSERACT_CMD / TESSERACT_LANG OCR engine path and language ("tam+eng")
  MENU_EXTRACT_CONFIG            JSON overrides for ExtractionConfig
  MENU_EXTRACT_KB                alternative dish knowledge base (JSON)
  MAX_CONTENT_LENGTH             upload cap in bytes, default ~20 MB
  MENU_EXTRACT_MAX_TEXT_CHARS    cap on text / html / OCR text, default 200k
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

# --- Paths ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

# --- Load .env (TESSERACT_CMD etc.) before anything reads the environment ---
load_dotenv(ROOT / ".env")

logging.basicConfig(
    level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

from menu_extract.config import load_config  # noqa: E402
from menu_extract.extractor import MenuExtractor  # noqa: E402
from menu_extract.knowledge_base import default_knowledge_base, load_knowledge_base  # noqa: E402
from menu_extract.ocr_facade import configure_tesseract_from_env  # noqa: E402
from portal.routes_extract import extract_bp  # noqa: E402
from routes.core import core_bp  # noqa: E402

# ------------------------
# App & Config
# ------------------------
app = Flask(__name__)

app.config["MAX_CONTENT_LENGTH"] = int(os.getenv("MAX_CONTENT_LENGTH") or 20 * 1024 * 1024)
app.config["MENU_EXTRACT_MAX_TEXT_CHARS"] = int(os.getenv("MENU_EXTRACT_MAX_TEXT_CHARS") or 200_000)
app.json.ensure_ascii = False  # Tamil names stay readable in responses

configure_tesseract_from_env()


def build_extractor() -> MenuExtractor:
    """Knowledge base + config are loaded once; bad files fail startup, not requests."""
    kb_path = os.getenv("MENU_EXTRACT_KB")
    kb = load_knowledge_base(kb_path) if kb_path else default_knowledge_base()
    cfg = load_config()
    log.info("Menu extractor ready: %d dishes, calibration %s", len(kb), cfg.price_calibration_factor)
    return MenuExtractor(kb, cfg)


app.extensions["menu_extractor"] = build_extractor()

app.register_blueprint(core_bp)
app.register_blueprint(extract_bp)


@app.errorhandler(RequestEntityTooLarge)
def too_large(_e):
    return jsonify({"ok": False, "error": "File too large. Try a smaller image or raise MAX_CONTENT_LENGTH."}), 413


@app.errorhandler(404)
def not_found(_e):
    return jsonify({"ok": False, "error": "not found"}), 404


if __name__ == "__main__":
    app.run(debug=True)
