from __future__ import annotations

import docx

from ats.services.resume_analyzer import SUGGESTIONS, ResumeAnalyzer, score_for_size


def test_score_for_size_is_clamped():
    assert score_for_size(0) == 95
    assert score_for_size(1_024) == 95
    assert score_for_size(2_560_000) == 50
    assert score_for_size(5_000_000) == 40


def test_extract_keywords_prefers_skills():
    analyzer = ResumeAnalyzer(max_keywords=5)
    text = "Built data pipelines with Python and SQL. Pipelines pipelines everywhere, deployed on Docker."
    keywords = analyzer.extract_keywords(text)
    assert keywords[:3] == ["python", "sql", "docker"]
    assert "pipelines" in keywords
    assert len(keywords) <= 5


def test_extract_keywords_empty_text():
    assert ResumeAnalyzer().extract_keywords("   ") == []


def test_analyze_docx_reads_text(tmp_path):
    path = tmp_path / "cv.docx"
    document = docx.Document()
    document.add_paragraph("Backend developer experienced in Python, FastAPI and PostgreSQL")
    document.save(str(path))

    result = ResumeAnalyzer().analyze(str(path))
    assert result["suggestions"] == SUGGESTIONS
    assert {"python", "fastapi", "postgresql"}.issubset(result["keywords"])
    assert 40 <= result["score"] <= 95


def test_analyze_unreadable_pdf_still_scores(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"not really a pdf")
    result = ResumeAnalyzer().analyze(str(path))
    assert result["keywords"] == []
    assert result["score"] == 95
