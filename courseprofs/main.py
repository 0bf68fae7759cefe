# courseprofs/main.py
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from courseprofs.config import settings
from courseprofs.database import Base, engine
from courseprofs.errors import register_exception_handlers
from courseprofs.api import course, professor, review

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="Courses & Professors Reviews API")

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    # Stays 500 when call_next raises; the global handler builds that response
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method, request.url.path, status_code, elapsed_ms
        )


# API routers
app.include_router(professor.router)  # /api/professor/*
app.include_router(course.router)     # /api/course/*
app.include_router(review.router)     # /review/*


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "Courses & Professors Reviews API is running",
        "version": "1.0.0",
    }
