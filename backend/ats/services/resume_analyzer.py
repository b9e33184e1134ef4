from __future__ import annotations

import logging
import re
from collections import Counter
from pathlib import Path
from typing import Any

import docx
from pypdf import PdfReader


logger = logging.getLogger(__name__)

SUGGESTIONS = [
    "Add more quantifiable achievements",
    "Include a clear summary at the top",
]

STOP_WORDS = {
    "and",
    "the",
    "for",
    "with",
    "from",
    "that",
    "this",
    "have",
    "was",
    "were",
    "are",
    "you",
    "your",
    "our",
}

SKILL_PATTERNS = [
    r"\b(python|java|javascript|typescript|c\+\+|sql|scala|go|rust)\b",
    r"\b(django|flask|fastapi|react|vue|angular|spring|tensorflow|pytorch)\b",
    r"\b(aws|azure|gcp|docker|kubernetes|terraform)\b",
    r"\b(pandas|numpy|spark|hadoop|kafka|airflow|dbt)\b",
    r"\b(postgresql|mysql|mongodb|redis|elasticsearch|cassandra)\b",
    r"\b(git|jenkins|jira|tableau|power bi|excel)\b",
]


def score_for_size(size_bytes: int) -> int:
    size_kb = max(1, round(size_bytes / 1024))
    return max(40, min(95, 100 - size_kb // 50))


class ResumeAnalyzer:
    """Produces the score/suggestions/keywords block returned after an upload.

    The score is derived from file size only. Keywords come from the document
    text when it can be read.
    """

    def __init__(self, max_keywords: int = 20) -> None:
        self.max_keywords = max_keywords

    def analyze(self, file_path: str) -> dict[str, Any]:
        path = Path(file_path)
        text = self.read_text(path)
        return {
            "score": score_for_size(path.stat().st_size),
            "suggestions": list(SUGGESTIONS),
            "keywords": self.extract_keywords(text),
        }

    def read_text(self, path: Path) -> str:
        suffix = path.suffix.lower()
        try:
            if suffix == ".pdf":
                return self._read_pdf(path)
            if suffix == ".docx":
                return self._read_docx(path)
        except Exception as exc:
            logger.warning("could not extract resume text file=%s error=%s", path.name, exc)
        return ""

    def _read_pdf(self, path: Path) -> str:
        with path.open("rb") as handle:
            pdf = PdfReader(handle)
            return "\n".join(page.extract_text() or "" for page in pdf.pages)

    def _read_docx(self, path: Path) -> str:
        document = docx.Document(str(path))
        return "\n".join(paragraph.text for paragraph in document.paragraphs)

    def extract_keywords(self, text: str) -> list[str]:
        if not text or not text.strip():
            return []
        text_lower = text.lower()
        skills: list[str] = []
        for pattern in SKILL_PATTERNS:
            for match in re.findall(pattern, text_lower):
                if match not in skills:
                    skills.append(match)

        tokens = re.findall(r"[a-z]{3,}", text_lower)
        freq = Counter(t for t in tokens if t not in STOP_WORDS and t not in skills)
        keywords = skills + [token for token, _ in freq.most_common(self.max_keywords)]
        return keywords[: self.max_keywords]
