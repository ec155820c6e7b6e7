"""
Day 98 -- Menu Extraction API (Flask).

portal/app.py, portal/routes_extract.py, routes/core.py

Covers:
  Health:
  - /health reports status, knowledge base size and categories
  - /health/ocr reports tesseract info, "degraded" without a version

  POST /api/menu/extract:
  - text payload -> categories, calibrated prices, Tamil names intact
  - html payload -> structured strategy
  - elements payload (JSON descriptors)
  - invalid shapes -> 400, oversized text -> 413

  POST /api/menu/extract-image (OCR monkeypatched):
  - OCR text fed through the extractor with its confidence
  - missing file / bad extension / undecodable image -> 400
  - OCR engine failure -> 503

  OCR facade:
  - image_to_data rows -> text lines + mean word confidence
  - preprocessing downscale + grayscale, language fallback
"""

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).parent.parent))

from menu_extract import ocr_facade
from menu_extract.errors import OcrError
from menu_extract.menu_types import TextBlock

SCENARIO_1 = "Rice Dishes\nநண்டு கறி (Jaffna Crab Curry) LKR 1200\nBread\nஅப்பம் (Hoppers) LKR 80"


@pytest.fixture()
def client():
    from portal.app import app
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buf, format="PNG")
    return buf.getvalue()


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["status"] == "ok"
        assert data["dishes"] == 17
        assert data["categories"][0] == "Rice"
        assert "Beverage" in data["categories"]

    def test_health_ocr_degraded(self, client, monkeypatch):
        monkeypatch.setattr(ocr_facade, "health", lambda: {
            "engine": "tesseract",
            "tesseract": {"cmd": "", "version": None, "found_on_disk": False,
                          "languages": [], "tamil": False},
        })
        data = client.get("/health/ocr").get_json()
        assert data["status"] == "degraded"
        assert data["tesseract"]["tamil"] is False

    def test_health_ocr_ok(self, client, monkeypatch):
        monkeypatch.setattr(ocr_facade, "health", lambda: {
            "engine": "tesseract",
            "tesseract": {"cmd": "/usr/bin/tesseract", "version": "5.3.0", "found_on_disk": True,
                          "languages": ["eng", "tam"], "tamil": True},
        })
        assert client.get("/health/ocr").get_json()["status"] == "ok"


class TestExtractJson:
    def test_text(self, client):
        resp = client.post("/api/menu/extract", json={"text": SCENARIO_1})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["ok"] is True
        menu = data["menu"]
        assert menu["totalItems"] == 2
        assert [c["name"] for c in menu["categories"]] == ["Rice", "Bread"]
        crab = menu["categories"][0]["items"][0]
        assert crab["price"] == 1140.0
        assert crab["nameTamil"] == "நண்டு கறி"
        assert crab["isSpicy"] is True

    def test_html(self, client):
        html = ('<h2>Desserts</h2><div class="menu-item"><h3>Payasam</h3>'
                '<span class="price">LKR 350</span></div>')
        data = client.post("/api/menu/extract", json={"html": html}).get_json()
        assert data["ok"] is True
        assert data["source"] == "html"
        assert data["menu"]["strategy"] == "structured_element"
        item = data["menu"]["categories"][0]["items"][0]
        assert item["nameEnglish"] == "Payasam"
        assert item["category"] == "Dessert"
        assert item["price"] == 350.0

    def test_elements(self, client):
        payload = {"elements": [{
            "tag": "div", "attributes": {"class": "food-item", "data-category": "Breakfast"},
            "children": [
                {"tag": "h4", "text": "Dosa"},
                {"tag": "span", "text": "Rs. 250", "attributes": {"class": "price"}},
            ],
        }]}
        data = client.post("/api/menu/extract", json=payload).get_json()
        assert data["menu"]["totalItems"] == 1
        assert data["menu"]["categories"][0]["name"] == "Breakfast"

    def test_empty_text_is_empty_menu(self, client):
        data = client.post("/api/menu/extract", json={"text": ""}).get_json()
        assert data["ok"] is True
        assert data["menu"]["totalItems"] == 0

    def test_not_json(self, client):
        resp = client.post("/api/menu/extract", data="hello", content_type="text/plain")
        assert resp.status_code == 400
        assert resp.get_json()["ok"] is False

    def test_two_inputs(self, client):
        resp = client.post("/api/menu/extract", json={"text": "a", "html": "<p>b</p>"})
        assert resp.status_code == 400

    def test_bad_element(self, client):
        resp = client.post("/api/menu/extract", json={"elements": [{"text": "no tag"}]})
        assert resp.status_code == 400
        assert "invalid element" in resp.get_json()["error"]

    def test_text_too_long(self, client, monkeypatch):
        from portal.app import app
        monkeypatch.setitem(app.config, "MENU_EXTRACT_MAX_TEXT_CHARS", 10)
        resp = client.post("/api/menu/extract", json={"text": SCENARIO_1})
        assert resp.status_code == 413


class TestExtractImage:
    def test_ocr_flow(self, client, monkeypatch):
        monkeypatch.setattr(
            ocr_facade, "ocr_image",
            lambda img: TextBlock("Rice\nநண்டு கறி (Jaffna Crab Curry) LKR 1200", ocr_confidence=88.5),
        )
        resp = client.post(
            "/api/menu/extract-image",
            data={"file": (io.BytesIO(_png_bytes()), "menu.png")},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["ocr"]["confidence"] == 88.5
        assert data["menu"]["totalItems"] == 1
        assert data["menu"]["categories"][0]["items"][0]["price"] == 1140.0
        assert data["menu"]["meta"]["ocrConfidence"] == 88.5

    def test_no_file(self, client):
        resp = client.post("/api/menu/extract-image", data={}, content_type="multipart/form-data")
        assert resp.status_code == 400

    def test_bad_extension(self, client):
        resp = client.post(
            "/api/menu/extract-image",
            data={"file": (io.BytesIO(b"%PDF-1.4"), "menu.pdf")},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 400
        assert "Unsupported" in resp.get_json()["error"]

    def test_undecodable_image(self, client):
        resp = client.post(
            "/api/menu/extract-image",
            data={"file": (io.BytesIO(b"definitely not a png"), "menu.png")},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 400
        assert "unreadable image" in resp.get_json()["error"]

    def test_ocr_failure(self, client, monkeypatch):
        def boom(img):
            raise OcrError("tesseract is not installed or TESSERACT_CMD is wrong")

        monkeypatch.setattr(ocr_facade, "ocr_image", boom)
        resp = client.post(
            "/api/menu/extract-image",
            data={"file": (io.BytesIO(_png_bytes()), "menu.png")},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 503
        assert resp.get_json()["ok"] is False


class TestOcrFacade:
    def test_lines_and_confidence(self):
        data = {
            "text": ["", "Rice", "நண்டு", "கறி", " "],
            "conf": ["-1", "90", "80", "70", "-1"],
            "block_num": [1, 1, 1, 1, 1],
            "par_num": [1, 1, 1, 1, 1],
            "line_num": [0, 1, 2, 2, 2],
        }
        lines, conf = ocr_facade._lines_and_confidence(data)
        assert lines == ["Rice", "நண்டு கறி"]
        assert conf == 80.0

    def test_no_words(self):
        assert ocr_facade._lines_and_confidence({"text": []}) == ([], None)

    def test_preprocess_downscales_to_grayscale(self):
        out = ocr_facade.preprocess_image(Image.new("RGB", (4000, 1000), "white"))
        assert out.size == (2000, 500)
        assert out.mode == "L"

    def test_pick_language_tamil_installed(self, monkeypatch):
        monkeypatch.delenv("TESSERACT_LANG", raising=False)
        monkeypatch.setattr(ocr_facade, "installed_languages", lambda: ["eng", "osd", "tam"])
        assert ocr_facade.pick_language() == "tam+eng"

    def test_pick_language_falls_back_to_english(self, monkeypatch):
        monkeypatch.delenv("TESSERACT_LANG", raising=False)
        monkeypatch.setattr(ocr_facade, "installed_languages", lambda: ["eng"])
        assert ocr_facade.pick_language() == "eng"

    def test_load_image_rejects_garbage(self):
        with pytest.raises(OcrError):
            ocr_facade.load_image(b"not an image")

    def test_load_image_rgb(self):
        assert ocr_facade.load_image(_png_bytes()).mode == "RGB"
