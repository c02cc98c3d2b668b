from fastapi import APIRouter

from app.services.session_store import session_count

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "sessions": session_count()}
