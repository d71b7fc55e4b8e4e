# app/api/routes_health.py
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/")
def root_status():
    return {"message": "QA Engineer Server is running!"}


@router.get("/api/test")
def api_test():
    return {
        "status": "success",
        "message": "Server API is working!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
def health_check():
    return {"status": "ok"}
