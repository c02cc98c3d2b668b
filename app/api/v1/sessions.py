from fastapi import APIRouter, File, HTTPException, Response, UploadFile, status
from fastapi.responses import HTMLResponse

from app.core.config import settings
from app.schemas.session import JOB_TITLES, JobSelection, JobTitlesResponse, SessionSnapshot
from app.schemas.view import SessionView
from app.services import session_store
from app.services.errors import (
    AnalysisValidationError,
    SessionBusyError,
    SessionNotFoundError,
)
from app.services.session_state import SessionState
from app.view.render import build_view, render_page

router = APIRouter()


def _load(session_id: str) -> SessionState:
    try:
        return session_store.get_session(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.user_message) from exc


async def _read_upload(file: UploadFile) -> bytes:
    limit = settings.max_upload_bytes
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(1024 * 64)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum allowed size is {limit // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.get("/job-titles", response_model=JobTitlesResponse)
async def job_titles():
    return JobTitlesResponse(job_titles=list(JOB_TITLES))


@router.post("/sessions", response_model=SessionSnapshot, status_code=status.HTTP_201_CREATED)
async def create_session():
    return session_store.create_session().snapshot()


@router.get("/sessions/{session_id}", response_model=SessionSnapshot)
async def get_session(session_id: str):
    return _load(session_id).snapshot()


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str):
    if not session_store.delete_session(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/sessions/{session_id}/job", response_model=SessionSnapshot)
async def select_job(session_id: str, payload: JobSelection):
    session = _load(session_id)
    session.select_job(payload.predefined_title, payload.custom_title)
    return session.snapshot()


@router.post("/sessions/{session_id}/resume", response_model=SessionSnapshot)
async def upload_resume(session_id: str, file: UploadFile = File(...)):
    session = _load(session_id)
    content = await _read_upload(file)
    try:
        await session.select_file(file.filename or "resume.pdf", content, file.content_type or "")
    except SessionBusyError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.user_message) from exc
    return session.snapshot()


@router.post("/sessions/{session_id}/analyze", response_model=SessionSnapshot)
async def analyze(session_id: str):
    session = _load(session_id)
    try:
        await session.analyze()
    except SessionBusyError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.user_message) from exc
    except AnalysisValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.user_message) from exc
    return session.snapshot()


@router.get("/sessions/{session_id}/view", response_model=SessionView)
async def session_view(session_id: str):
    return build_view(_load(session_id))


@router.get("/sessions/{session_id}/page", response_class=HTMLResponse)
async def session_page(session_id: str):
    return HTMLResponse(render_page(build_view(_load(session_id))))
