from __future__ import annotations

from modernizer.config import Settings, get_settings
from modernizer.server import app
from modernizer.services.gemini_client import InvalidApiKeyError, QuotaExceededError, UpstreamError

from tests.conftest import LEGACY_JS


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_analysis_types(client):
    response = client.get("/api/analysis-types")

    assert response.status_code == 200
    ids = [entry["id"] for entry in response.json()]
    assert ids == [
        "modernization",
        "transformation",
        "architecture",
        "performance",
        "security",
        "documentation",
        "cicd",
        "complexity",
        "reporting",
    ]


def test_analyze(client, fake_gemini):
    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "modernization", "apiKey": "user-key"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["analysisType"] == "modernization"
    assert body["result"] == fake_gemini.default
    assert body["score"] == body["metrics"]["overallScore"] == 68
    assert body["metrics"]["improvementPotential"] == 32
    assert body["metrics"]["category"] == "modernization"
    assert body["demoMode"] is False
    assert "timestamp" in body
    assert fake_gemini.api_keys == ["user-key"]


def test_analyze_requires_api_key(client):
    response = client.post("/api/analyze", data={"code": LEGACY_JS, "analysisType": "security"})

    assert response.status_code == 400
    assert response.json() == {"error": "API key is required"}


def test_analyze_requires_code(client):
    response = client.post("/api/analyze", data={"analysisType": "security", "apiKey": "user-key"})

    assert response.status_code == 400
    assert response.json()["error"] == "No code provided"


def test_analyze_rejects_unknown_category(client, fake_gemini):
    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "bogus", "apiKey": "user-key"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid analysis type"
    assert fake_gemini.prompts == []


def test_analyze_invalid_key(client, fake_gemini):
    fake_gemini.responses["security"] = InvalidApiKeyError("API_KEY_INVALID")

    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "security", "apiKey": "bad-key"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid API Key"
    assert body["helpUrl"] == get_settings().help_url


def test_analyze_quota_exceeded(client, fake_gemini):
    fake_gemini.responses["security"] = QuotaExceededError("429")

    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "security", "apiKey": "user-key"},
    )

    assert response.status_code == 429
    assert response.json()["error"] == "API Quota Exceeded"
    assert "helpUrl" in response.json()


def test_analyze_upstream_failure(client, fake_gemini):
    fake_gemini.responses["security"] = UpstreamError("backend exploded")

    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "security", "apiKey": "user-key"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Analysis failed", "details": "backend exploded"}


def test_analyze_demo_mode(client, fake_gemini, demo_key):
    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "performance", "apiKey": demo_key},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["demoMode"] is True
    assert body["result"].startswith("## Performance Analysis")
    assert body["score"] == body["metrics"]["overallScore"]
    assert fake_gemini.prompts == []


def test_analyze_demo_mode_unknown_category(client, demo_key):
    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "bogus", "apiKey": demo_key},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["result"].startswith("## Code Modernization Analysis")
    assert body["metrics"]["category"] == "bogus"


def test_uploaded_file_takes_precedence(client, fake_gemini):
    response = client.post(
        "/api/analyze",
        data={"code": "print('from text field')", "analysisType": "security", "apiKey": "user-key"},
        files={"file": ("snippet.js", b"var fromFile = 1;", "text/javascript")},
    )

    assert response.status_code == 200
    assert "var fromFile = 1;" in fake_gemini.prompts[0]
    assert "from text field" not in fake_gemini.prompts[0]


def test_upload_too_large(client):
    app.dependency_overrides[get_settings] = lambda: Settings(max_upload_bytes=8)

    response = client.post(
        "/api/analyze",
        data={"analysisType": "security", "apiKey": "user-key"},
        files={"file": ("snippet.js", b"var x = 1234567890;", "text/javascript")},
    )

    assert response.status_code == 413
    assert response.json()["error"] == "File too large"


def test_upload_unsupported_type(client):
    response = client.post(
        "/api/analyze",
        data={"analysisType": "security", "apiKey": "user-key"},
        files={"file": ("diagram.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 415
    assert response.json()["error"] == "Unsupported file type"


def test_upload_must_be_utf8(client):
    response = client.post(
        "/api/analyze",
        data={"analysisType": "security", "apiKey": "user-key"},
        files={"file": ("snippet.js", b"\xff\xfe\x00bad", "text/javascript")},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Uploaded file must be UTF-8 text"


def test_analyze_all(client, fake_gemini):
    response = client.post("/api/analyze-all", data={"code": LEGACY_JS, "apiKey": "user-key"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert len(body["results"]) == 9
    assert len(fake_gemini.prompts) == 9
    for outcome in body["results"].values():
        assert set(outcome) == {"result", "score", "metrics", "status"}
        assert outcome["status"] == "ok"


def test_analyze_all_with_one_quota_failure(client, fake_gemini):
    fake_gemini.responses["documentation"] = QuotaExceededError("429 quota exceeded")

    response = client.post("/api/analyze-all", data={"code": LEGACY_JS, "apiKey": "user-key"})

    assert response.status_code == 200
    results = response.json()["results"]
    assert len(results) == 9
    assert results["documentation"]["score"] == 0
    assert results["documentation"]["status"] == "quota_exceeded"
    assert "API Quota Exceeded" in results["documentation"]["result"]
    assert results["security"]["score"] > 0


def test_analyze_all_requires_api_key(client):
    response = client.post("/api/analyze-all", data={"code": LEGACY_JS})

    assert response.status_code == 400
    assert response.json()["error"] == "API key is required"


def test_analyze_all_requires_code(client):
    response = client.post("/api/analyze-all", data={"apiKey": "user-key"})

    assert response.status_code == 400
    assert response.json()["error"] == "No code provided"


def test_analyze_all_demo_mode(client, fake_gemini, demo_key):
    response = client.post("/api/analyze-all", data={"code": LEGACY_JS, "apiKey": demo_key})

    assert response.status_code == 200
    body = response.json()
    assert body["demoMode"] is True
    assert len(body["results"]) == 9
    assert all(outcome["status"] == "demo" for outcome in body["results"].values())
    assert fake_gemini.prompts == []


def test_uploaded_file_with_bom(client, fake_gemini):
    response = client.post(
        "/api/analyze",
        data={"analysisType": "security", "apiKey": "user-key"},
        files={"file": ("snippet.js", b"\xef\xbb\xbfvar x = 1;", "text/javascript")},
    )

    assert response.status_code == 200
    assert "\ufeff" not in fake_gemini.prompts[0]
    assert fake_gemini.prompts[0].endswith("```\nvar x = 1;\n```")


def test_analyze_closes_client(client, fake_gemini):
    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "security", "apiKey": "user-key"},
    )

    assert response.status_code == 200
    assert fake_gemini.close_count == 1


def test_analyze_closes_client_on_upstream_error(client, fake_gemini):
    fake_gemini.responses["security"] = QuotaExceededError("429")

    response = client.post(
        "/api/analyze",
        data={"code": LEGACY_JS, "analysisType": "security", "apiKey": "user-key"},
    )

    assert response.status_code == 429
    assert fake_gemini.close_count == 1


def test_analyze_all_closes_client(client, fake_gemini):
    response = client.post("/api/analyze-all", data={"code": LEGACY_JS, "apiKey": "user-key"})

    assert response.status_code == 200
    assert fake_gemini.close_count == 1


def test_demo_mode_builds_no_client(client, fake_gemini, demo_key):
    client.post("/api/analyze-all", data={"code": LEGACY_JS, "apiKey": demo_key})

    assert fake_gemini.api_keys == []
    assert fake_gemini.close_count == 0
