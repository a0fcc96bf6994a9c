"""
API integration tests for palette, atlas and matching endpoints.
"""

import base64
from io import BytesIO

import numpy as np
import pytest
from PIL import Image


def png_b64(array: np.ndarray) -> str:
    buffer = BytesIO()
    Image.fromarray(array).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def two_block_image():
    """Left half red, right half blue"""
    img = np.zeros((60, 60, 3), dtype=np.uint8)
    img[:, :30] = (230, 20, 20)
    img[:, 30:] = (20, 20, 230)
    return img


@pytest.fixture
def atlas_body(two_cluster_catalog):
    return {
        "colors": [{"name": c.name, "hex": c.hex} for c in two_cluster_catalog],
        "favorites": ["004040"],
    }


class TestPaletteAPI:
    """Test the /v1/palette endpoint"""
    
    def test_single_color_palette(self, test_client, two_block_image):
        """k=1 returns the mean color of all samples"""
        response = test_client.post(
            "/v1/palette?k=1&seed=7",
            json={"image_b64": png_b64(two_block_image)}
        )
        
        assert response.status_code == 200
        data = response.json()
        assert data["k"] == 1
        assert data["request_id"].startswith("pal-")
        assert data["sampled_pixels"] == 60 * 60
        assert data["palette"] == [{"hex": "#7D147D", "rgb": [125, 20, 125]}]
        assert data["swatch_png_b64"]
    
    def test_palette_has_k_entries(self, test_client, two_block_image):
        response = test_client.post(
            "/v1/palette?k=3&seed=1&include_swatch=false",
            json={"image_b64": png_b64(two_block_image)}
        )
        
        assert response.status_code == 200
        data = response.json()
        assert len(data["palette"]) == 3
        assert data["swatch_png_b64"] is None
        for entry in data["palette"]:
            assert entry["hex"].startswith("#") and len(entry["hex"]) == 7
    
    def test_undecodable_image_yields_empty_palette(self, test_client):
        response = test_client.post("/v1/palette", json={"image_b64": "bm90IGFuIGltYWdl"})
        
        assert response.status_code == 200
        data = response.json()
        assert data["palette"] == []
        assert data["sampled_pixels"] == 0
        assert data["swatch_png_b64"] is None
    
    def test_oversized_image_yields_empty_palette(self, test_client, monkeypatch):
        """Decompression-bomb sized images are answered like undecodable ones"""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        response = test_client.post(
            "/v1/palette",
            json={"image_b64": png_b64(np.zeros((20, 20, 3), dtype=np.uint8))}
        )
        
        assert response.status_code == 200
        assert response.json()["palette"] == []
    
    def test_k_out_of_range(self, test_client, two_block_image):

        response = test_client.post("/v1/palette?k=0", json={"image_b64": png_b64(two_block_image)})
        assert response.status_code == 422


class TestAtlasAPI:
    """Test the /v1/atlas endpoints"""
    
    def test_atlas_buckets(self, test_client, atlas_body):
        response = test_client.post("/v1/atlas?hue_bins=2&y_bins=2&mode=lightness", json=atlas_body)
        
        assert response.status_code == 200
        data = response.json()
        assert data["total_colors"] == 10
        assert (data["y_min"], data["y_max"]) == (0, 1)
        
        buckets = {b["id"]: b for b in data["buckets"]}
        assert set(buckets) == {"0-1", "1-0"}
        assert buckets["0-1"]["count"] == 5
        assert buckets["0-1"]["representative"]["name"] == "Blush 0"
        assert buckets["0-1"]["is_favorite"] is False
        assert buckets["1-0"]["is_favorite"] is True
        assert data["grid_png_b64"] is None
    
    def test_atlas_grid_png(self, test_client, atlas_body):
        response = test_client.post("/v1/atlas?hue_bins=2&y_bins=2&include_grid=true", json=atlas_body)
        assert response.status_code == 200
        assert response.json()["grid_png_b64"]
    
    def test_empty_atlas(self, test_client):
        response = test_client.post("/v1/atlas", json={"colors": []})
        assert response.status_code == 200
        data = response.json()
        assert data["buckets"] == []
        assert (data["y_min"], data["y_max"]) == (0, 0)
    
    def test_invalid_mode(self, test_client, atlas_body):
        response = test_client.post("/v1/atlas?mode=brightness", json=atlas_body)
        assert response.status_code == 422
    
    def test_bucket_listing(self, test_client, atlas_body):
        response = test_client.post(
            "/v1/atlas/bucket?hue_index=1&y_index=0&hue_bins=2&y_bins=2&limit=2",
            json=atlas_body
        )
        
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "1-0"
        assert data["total"] == 5
        assert [item["name"] for item in data["items"]] == ["Deep Teal 0", "Deep Teal 1"]
        assert data["items"][0]["is_favorite"] is True
    
    def test_bucket_outside_grid(self, test_client, atlas_body):
        response = test_client.post(
            "/v1/atlas/bucket?hue_index=5&y_index=0&hue_bins=2&y_bins=2",
            json=atlas_body
        )
        assert response.status_code == 400
        assert "outside 2x2 grid" in response.json()["detail"]


class TestMatchAPI:
    """Test /v1/colors/match"""
    
    def test_exact_and_nearest(self, test_client):
        colors = [{"name": "Red", "hex": "#FF0000"}, {"name": "Blue", "hex": "#0000FF"}]
        
        exact = test_client.post("/v1/colors/match", json={"hex": " ff0000", "colors": colors}).json()
        assert exact["exact"] is True
        assert exact["normalized"] == "FF0000"
        assert exact["match"]["name"] == "Red"
        
        nearest = test_client.post("/v1/colors/match", json={"hex": "#1010EE", "colors": colors}).json()
        assert nearest["exact"] is False
        assert nearest["match"]["name"] == "Blue"
    
    def test_empty_catalog(self, test_client):
        data = test_client.post("/v1/colors/match", json={"hex": "#123456"}).json()
        assert data["match"] is None


class TestMetricsAPI:
    """Test /v1/metrics"""
    
    def test_counters_track_requests(self, test_client):
        test_client.post("/v1/atlas", json={"colors": []})
        data = test_client.get("/v1/metrics").json()
        assert data["counters"]["atlas_requests_total"] == 1
        assert data["counters"]["atlas_empty_total"] == 1
    
    def test_counters_track_searches(self, test_client):
        test_client.post("/v1/colors/search", json={"query": "red", "colors": []})
        counters = test_client.get("/v1/metrics").json()["counters"]
        assert counters["search_requests_total"] == 1
        assert counters["search_empty_total"] == 1


class TestSearchAPI:
    """Test /v1/colors/search"""
    
    @pytest.fixture
    def search_body(self, vendor_catalog):
        colors = []
        for c in vendor_catalog:
            entry = {"name": c.name, "hex": c.hex}
            if c.vendor is not None:
                entry["vendor"] = {"brand": c.vendor.brand, "code": c.vendor.code}
            colors.append(entry)
        return {"colors": colors}
    
    def test_search_by_brand(self, test_client, search_body):
        response = test_client.post("/v1/colors/search", json={**search_body, "query": "Acme"})
        
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [item["vendor"]["code"] for item in data["items"]] == ["AC-12", "AC-03"]
    
    def test_luminance_order(self, test_client, search_body):
        response = test_client.post(
            "/v1/colors/search?order=luminance&ascending=false",
            json=search_body
        )
        
        assert response.status_code == 200
        data = response.json()
        assert data["order"] == "luminance"
        assert [item["name"] for item in data["items"]][0] == "White"
        assert data["items"][-1]["name"] == "Navy"
    
    def test_unknown_order(self, test_client, search_body):
        response = test_client.post("/v1/colors/search?order=hue", json=search_body)
        assert response.status_code == 422


class TestColorDetailAPI:
    """Test /v1/colors/detail"""
    
    def test_red_detail(self, test_client):
        response = test_client.get("/v1/colors/detail", params={"hex": "#ff0000", "harmony": "triadic"})
        
        assert response.status_code == 200
        data = response.json()
        assert data["color"] == {"hex": "#FF0000", "rgb": [255, 0, 0]}
        assert data["rgb_text"] == "RGB(255, 0, 0)"
        assert data["hsb"] == [0.0, 1.0, 1.0]
        assert [c["hex"] for c in data["shades_tints"]] == ["#8C0000", "#BF0000", "#FF0000"]
        assert data["harmony_mode"] == "triadic"
        assert [c["hex"] for c in data["harmony"]] == ["#FF0000", "#00FF00", "#0000FF"]
    
    def test_contrast_against_black_and_white(self, test_client):
        data = test_client.get("/v1/colors/detail", params={"hex": "FF0000"}).json()
        
        contrast = {entry["text_color"]: entry for entry in data["contrast"]}
        assert contrast["black"]["ratio"] == pytest.approx(5.25, abs=0.01)
        assert contrast["black"]["rating"] == "AA"
        assert contrast["white"]["rating"] == "low"
        assert data["harmony_mode"] == "complementary"
    
    def test_unknown_harmony(self, test_client):
        response = test_client.get("/v1/colors/detail", params={"hex": "#123456", "harmony": "tetradic"})
        assert response.status_code == 422


class TestOpenAPI:
    """Test the published error schema"""
    
    def test_bad_request_documents_error_response(self, test_client):
        paths = test_client.get("/openapi.json").json()["paths"]
        
        for path, method in [("/v1/palette", "post"), ("/v1/atlas", "post"),
                             ("/v1/atlas/bucket", "post"), ("/v1/colors/search", "post"),
                             ("/v1/colors/detail", "get")]:
            error = paths[path][method]["responses"]["400"]
            schema = error["content"]["application/json"]["schema"]
            assert schema["$ref"].endswith("/ErrorResponse")
