from __future__ import annotations

from html import escape

from app.schemas.session import JOB_TITLES, OTHER_JOB_TITLE
from app.schemas.view import (
    BreakdownView,
    ControlsView,
    KeywordListView,
    ResultView,
    ScoreBand,
    SessionView,
)
from app.services.session_state import SessionState

HIGH_SCORE_MIN = 85
MEDIUM_SCORE_MIN = 60

NO_FOUND_KEYWORDS = "No matching keywords found."
NO_MISSING_KEYWORDS = "Great job! No critical keywords are missing."


def score_band(score: float) -> ScoreBand:
    if score >= HIGH_SCORE_MIN:
        return "high"
    if score >= MEDIUM_SCORE_MIN:
        return "medium"
    return "low"


def score_class(score: float) -> str:
    return f"{score_band(score)}-score"


def _format_score(score: float) -> str:
    return str(int(score)) if float(score).is_integer() else f"{score:g}"


def _upload_label(session: SessionState) -> str:
    if session.is_parsing:
        return "Parsing PDF..."
    return "Change PDF" if session.resume.file_name else "Choose PDF File"


def _result_view(session: SessionState) -> ResultView | None:
    result = session.result
    if result is None:
        return None
    keywords = result.keywordAnalysis
    return ResultView(
        overall_score=_format_score(result.overallScore),
        score_band=score_band(result.overallScore),
        score_class=score_class(result.overallScore),
        summary=result.summary,
        breakdown=[
            BreakdownView(
                criterion=item.criterion,
                score=_format_score(item.score),
                score_class=score_class(item.score * 10),
                feedback=item.feedback,
            )
            for item in result.breakdown
        ],
        found=KeywordListView(keywords=list(keywords.foundKeywords), empty_message=NO_FOUND_KEYWORDS),
        missing=KeywordListView(keywords=list(keywords.missingKeywords), empty_message=NO_MISSING_KEYWORDS),
    )


def build_view(session: SessionState) -> SessionView:
    controls = ControlsView(
        job_options=list(JOB_TITLES),
        selected_job=session.job.predefined_title,
        custom_title=session.job.custom_title,
        show_custom_title=session.job.predefined_title == OTHER_JOB_TITLE,
        upload_label=_upload_label(session),
        file_name=session.resume.file_name,
        trigger_label="Analyzing..." if session.is_analyzing else "Rank My Resume",
        trigger_disabled=not session.can_analyze,
        error_message=session.last_error,
    )
    if session.is_analyzing:
        panel = "loading"
    elif session.result is not None:
        panel = "result"
    else:
        panel = "placeholder"
    return SessionView(
        session_id=session.session_id,
        controls=controls,
        panel=panel,
        result=_result_view(session) if panel == "result" else None,
    )


def _render_controls(controls: ControlsView) -> str:
    options = ['<option value="" disabled{}>Choose a job...</option>'.format(
        "" if controls.selected_job else " selected"
    )]
    for job in controls.job_options:
        selected = " selected" if job == controls.selected_job else ""
        options.append(f'<option value="{escape(job)}"{selected}>{escape(job)}</option>')

    parts = [
        '<div class="input-section">',
        '<div class="input-group">',
        '<label for="job-select">Select Job Title</label>',
        '<select id="job-select" name="predefined_title">' + "".join(options) + "</select>",
        "</div>",
    ]
    if controls.show_custom_title:
        parts += [
            '<div class="input-group">',
            '<label for="custom-job-title">Please Specify Job Title</label>',
            '<input type="text" id="custom-job-title" class="custom-job-input" name="custom_title" '
            f'value="{escape(controls.custom_title)}" placeholder="e.g., Machine Learning Engineer">',
            "</div>",
        ]
    parts += [
        '<div class="input-group">',
        '<label for="resume-upload">Upload Your Resume (PDF)</label>',
        '<input type="file" id="resume-upload" name="file" accept=".pdf">',
        f'<label for="resume-upload" class="file-upload-label">{escape(controls.upload_label)}</label>',
    ]
    if controls.file_name:
        parts.append(f'<p class="file-name-display">Selected: {escape(controls.file_name)}</p>')
    parts.append("</div>")
    disabled = " disabled" if controls.trigger_disabled else ""
    parts.append(f'<button type="submit" id="rank-button"{disabled}>{escape(controls.trigger_label)}</button>')
    if controls.error_message:
        parts.append(f'<p class="error-message">{escape(controls.error_message)}</p>')
    parts.append("</div>")
    return "\n".join(parts)


def _render_keywords(title: str, css: str, keywords: KeywordListView) -> str:
    if keywords.keywords:
        items = "".join(f"<li>{escape(kw)}</li>" for kw in keywords.keywords)
        body = f'<ul class="keyword-list">{items}</ul>'
    else:
        body = f'<p class="no-keywords">{escape(keywords.empty_message)}</p>'
    return f'<div class="keyword-list-container {css}"><h4>{title}</h4>{body}</div>'


def _render_result(result: ResultView) -> str:
    cards = "\n".join(
        '<div class="breakdown-card">'
        f"<h4>{escape(item.criterion)}</h4>"
        f'<p class="criterion-score {item.score_class}">{escape(item.score)}/10</p>'
        f'<p class="feedback">{escape(item.feedback)}</p>'
        "</div>"
        for item in result.breakdown
    )
    return "\n".join(
        [
            '<div class="results-display" aria-live="polite">',
            "<h2>Analysis Complete</h2>",
            '<div class="overall-score-container">',
            f'<div class="score-circle {result.score_class}">',
            f'<span class="score">{escape(result.overall_score)}</span><span class="score-of">/ 100</span>',
            "</div>",
            f'<div class="summary"><h3>Overall Match Score</h3><p>{escape(result.summary)}</p></div>',
            "</div>",
            "<h3>Detailed Breakdown</h3>",
            f'<div class="breakdown-grid">{cards}</div>',
            '<div class="keyword-analysis-section">',
            "<h3>Keyword Analysis</h3>",
            '<div class="keyword-analysis-grid">',
            _render_keywords("Keywords Found", "keywords-found", result.found),
            _render_keywords("Missing Keywords", "keywords-missing", result.missing),
            "</div>",
            "</div>",
            "</div>",
        ]
    )


def render_page(view: SessionView) -> str:
    if view.panel == "loading":
        panel = (
            '<div class="loading-container"><div class="spinner"></div>'
            "<p>Analyzing your resume against real-time job data...</p></div>"
        )
    elif view.panel == "result" and view.result is not None:
        panel = _render_result(view.result)
    else:
        panel = (
            '<div class="placeholder"><h2>Your Results Will Appear Here</h2>'
            "<p>Select a job and upload your resume to start.</p></div>"
        )

    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            '<head><meta charset="utf-8"><title>ATS Resume Ranker</title></head>',
            f'<body data-session-id="{escape(view.session_id)}">',
            '<div class="container">',
            "<header><h1>ATS Resume Ranker</h1>",
            "<p>Get an instant analysis of how well your resume matches a job description.</p></header>",
            "<main>",
            _render_controls(view.controls),
            f'<div class="results-section">{panel}</div>',
            "</main>",
            "</div>",
            "</body>",
            "</html>",
        ]
    )
