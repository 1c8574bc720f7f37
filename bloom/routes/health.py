from fastapi import APIRouter
from fastapi.responses import JSONResponse

from bloom.db import db_ping

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

# readiness probe
@router.get("/ready")
def ready():
    ok = db_ping()
    body = {"status": "ok" if ok else "unready", "checks": {"db": ok}}
    # 503 when the database is unreachable
    return JSONResponse(status_code=200 if ok else 503, content=body)
