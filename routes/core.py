# routes/core.py
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from menu_extract import ocr_facade

core_bp = Blueprint("core", __name__)


@core_bp.get("/health")
def health():
    extractor = current_app.extensions.get("menu_extractor")
    kb = extractor.knowledge_base if extractor is not None else None
    return jsonify({
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "dishes": len(kb) if kb is not None else 0,
        "categories": kb.categories() if kb is not None else [],
    })


@core_bp.get("/health/ocr")
def health_ocr():
    info = ocr_facade.health()
    info["status"] = "ok" if info["tesseract"]["version"] else "degraded"
    return jsonify(info)
