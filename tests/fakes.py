import json

from app.services.errors import ExtractionError, ServiceFailure

RESUME_TEXT = (
    "Jane Doe, Frontend Developer. Six years shipping React, TypeScript and Next.js apps; "
    "led accessibility audits, built design systems, and mentored junior engineers on testing."
)

WELL_FORMED_RESPONSE = json.dumps(
    {
        "overallScore": 90,
        "summary": "Strong match for a modern frontend role.",
        "breakdown": [
            {"criterion": "Current professional requirements", "score": 9, "feedback": "Covers the role."},
            {"criterion": "Skills alignment", "score": 9, "feedback": "React and TypeScript."},
            {"criterion": "Education & Certifications", "score": 6, "feedback": "No certifications."},
            {"criterion": "Tools and Frameworks", "score": 8.5, "feedback": "Next.js, Jest."},
            {"criterion": "Format & ATS Friendliness", "score": 5, "feedback": "Dense layout."},
        ],
        "keywordAnalysis": {
            "foundKeywords": ["React", "TypeScript", "Accessibility"],
            "missingKeywords": ["GraphQL"],
        },
    }
)


class FakeAnalysisClient:
    def __init__(self, responses=None):
        self.responses = list(responses or [WELL_FORMED_RESPONSE])
        self.prompts: list[str] = []

    async def submit(self, prompt: str) -> str:
        self.prompts.append(prompt)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def text_extractor(text: str = RESUME_TEXT):
    calls: list[tuple[bytes, str]] = []

    def extractor(content: bytes, mime_type: str) -> str:
        calls.append((content, mime_type))
        return text

    extractor.calls = calls
    return extractor


def failing_extractor(kind: str):
    calls: list[tuple[bytes, str]] = []

    def extractor(content: bytes, mime_type: str) -> str:
        calls.append((content, mime_type))
        raise ExtractionError(kind)

    extractor.calls = calls
    return extractor


def service_down() -> ServiceFailure:
    return ServiceFailure("upstream 503")
