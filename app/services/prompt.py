from __future__ import annotations

CRITERIA: tuple[str, ...] = (
    "Current professional requirements for that job.",
    "Skills mentioned (alignment with job description).",
    "Education & Certifications relevance.",
    "Knowledge of Tools and Frameworks mentioned.",
    "Proper Format & ATS Friendliness (clarity, structure, keyword usage).",
)

RESULT_SCHEMA = """{
    "overallScore": number,
    "summary": string,
    "breakdown": [
        { "criterion": string, "score": number, "feedback": string }, ...
    ],
    "keywordAnalysis": {
        "foundKeywords": [string, ...],
        "missingKeywords": [string, ...]
    }
}"""


def build_prompt(job_title: str, resume_text: str) -> str:
    criteria = "\n".join(f"{i}. {item}" for i, item in enumerate(CRITERIA, start=1))
    return (
        "You are an expert ATS (Applicant Tracking System) and a professional resume reviewer.\n"
        f'Your task is to analyze the provided resume against a job description for the role of a "{job_title}".\n\n'
        "First, using your web search capabilities, find a representative and current job description "
        f'for a "{job_title}". Use this as the benchmark for your analysis.\n\n'
        "Then, analyze the following resume based on that job description.\n\n"
        f"Resume Text:\n---\n{resume_text}\n---\n\n"
        "In addition to the ranking, perform a keyword analysis. Identify the top 10-15 most crucial "
        "keywords (skills, technologies, qualifications) from the job description. Then, compare the "
        "resume against this list.\n\n"
        "Please provide your analysis ONLY in a valid JSON format, without any markdown formatting or "
        "other text outside the JSON object. The overallScore is out of 100 and each breakdown score "
        "is out of 10. The ranking should be based on the following criteria:\n"
        f"{criteria}\n\n"
        f"The JSON response should conform to this structure:\n{RESULT_SCHEMA}\n"
    )
