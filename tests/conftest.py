"""Shared fixtures for the SMM feature analyzer test suite."""

import pytest

from app.agents import content_analyzer
from app.models.analysis import AnalysisReport, InstagramContent, TargetAudience


# ---------------------------------------------------------------------------
# Ensure we don't hit the real provider during tests
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _block_provider(monkeypatch):
    """Clear the OpenRouter key and the cached model between tests."""
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    content_analyzer.get_model.cache_clear()
    yield
    content_analyzer.get_model.cache_clear()


# ---------------------------------------------------------------------------
# Form input
# ---------------------------------------------------------------------------
@pytest.fixture
def valid_audience():
    return TargetAudience(
        ageMin="18",
        ageMax="35",
        gender="Semua",
        location="Jakarta",
        interests="fashion",
    )


@pytest.fixture
def valid_content():
    return InstagramContent(link="", caption="Great outfit!")


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------
@pytest.fixture
def report_data():
    """Raw provider output matching the AnalysisReport shape."""
    return {
        "interactivity": {"score": 7, "explanation": "Ada ajakan untuk berkomentar."},
        "entertainment": {"score": 6, "explanation": "Visualnya cukup menarik."},
        "relevance": {"score": 9, "explanation": "Cocok untuk pecinta fashion di Jakarta."},
        "informativeness": {"score": 4, "explanation": "Minim info produk."},
        "purchaseInfluence": {
            "likelihood": "Sedang",
            "explanation": "Produk terlihat jelas tapi tanpa harga.",
        },
        "overallSummary": "Konten relevan namun kurang informatif.",
        "suggestions": ["Tambahkan harga", "Gunakan call-to-action yang jelas"],
    }


@pytest.fixture
def sample_report(report_data):
    return AnalysisReport.model_validate(report_data)


@pytest.fixture
def other_report(report_data):
    data = dict(report_data, overallSummary="Laporan kedua.", suggestions=[])
    return AnalysisReport.model_validate(data)
