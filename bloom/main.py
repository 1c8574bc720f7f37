from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bloom.config import settings
from bloom.errors import AccessError
from bloom.log import RequestLogMiddleware, configure_logging
from bloom.routes.auth import router as auth_router
from bloom.routes.health import router as health_router
from bloom.routes.projects import router as projects_router
from bloom.routes.todos import router as todos_router
from bloom.routes.users import router as users_router

async def access_error_handler(request: Request, exc: AccessError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(title="bloom", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type"],
        max_age=300,
    )
    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(AccessError, access_error_handler)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(todos_router)
    app.include_router(users_router)
    return app

app = create_app()
