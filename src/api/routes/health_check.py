from fastapi import APIRouter

from config import ApplicationConfig

router = APIRouter()


@router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "database": "configured" if ApplicationConfig.DB_URI else "missing",
        "auth": {"secret": "configured" if ApplicationConfig.AUTH_SECRET else "missing"},
        "email": {"provider": "resend" if ApplicationConfig.RESEND_API_KEY else "disabled"},
    }
