import os
import logging
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from config.settings import settings
from config.logging_config import configure_logging
from models.index import init_db
from utils.exceptions import ReviewEngineError

configure_logging()
logger = logging.getLogger("ghost_texts")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # schema is owned by alembic outside development
    if not settings.is_production:
        init_db()
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)

@app.exception_handler(ReviewEngineError)
async def review_engine_error_handler(request: Request, exc: ReviewEngineError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("database failure on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )

#load all routes
def load_routes(directory: Path):
    import importlib
    routers = []
    root = directory.parent
    for item in sorted(directory.rglob("*_routes.py")):
        # import by dotted name so models are registered exactly once
        module_name = ".".join(item.relative_to(root).with_suffix("").parts)
        module = importlib.import_module(module_name)
        if hasattr(module, "router"):
            routers.append(module.router)
    return routers

for router in load_routes(Path(__file__).parent / "api"):
    app.include_router(router, prefix="/api")

@app.get("/health")
def health_check():
    return {"status": "ok"}

@app.get("/")
def home():
    return {"message": "Hello world"}

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", settings.PORT or 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
