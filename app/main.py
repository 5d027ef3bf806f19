"""
Main FastAPI application exposing the assessment engine
"""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import time
import uuid
from contextlib import asynccontextmanager

from app.config import settings
from app.core.logging import get_logger, setup_logging, request_id_var
from app.core.exceptions import AssessmentError
from app.routes import exam_routes, quiz_routes, quota_routes


logger = get_logger(__name__)

SERVICE_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging()
    logger.info("Assessment Engine starting up",
                environment=settings.environment.value,
                debug=settings.debug)
    yield
    logger.info("Assessment Engine shutting down")


app = FastAPI(
    title="Assessment Engine",
    version=SERVICE_VERSION,
    description="Answer scoring and question quota planning for quizzes and exams",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests"""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    request_id_var.set(request_id)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing"""
    start_time = time.time()

    logger.info("request_received",
                method=request.method,
                path=request.url.path,
                client=request.client.host if request.client else None)

    try:
        response = await call_next(request)
        duration = time.time() - start_time

        logger.info("request_completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_seconds=duration)

        response.headers["X-Process-Time"] = str(duration)
        return response

    except Exception as e:
        duration = time.time() - start_time
        logger.error("request_failed",
                     method=request.method,
                     path=request.url.path,
                     error=str(e),
                     duration_seconds=duration)
        raise


@app.exception_handler(AssessmentError)
async def handle_assessment_error(request: Request, exc: AssessmentError):
    """Handle rejected quotas, generation requests and malformed questions"""
    logger.warning("Request rejected",
                   error=exc.message,
                   code=exc.code,
                   details=exc.details,
                   path=request.url.path)

    return JSONResponse(
        status_code=400,
        content={
            "error": exc.message,
            "code": exc.code,
            "details": exc.details,
            "request_id": request_id_var.get()
        }
    )


@app.exception_handler(Exception)
async def handle_generic_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error("Unexpected error",
                 error=str(exc),
                 error_type=type(exc).__name__,
                 path=request.url.path)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if settings.debug else "An unexpected error occurred",
            "request_id": request_id_var.get()
        }
    )


# Include routers
app.include_router(quiz_routes.router)
app.include_router(exam_routes.router)
app.include_router(quota_routes.router)


@app.get("/health")
async def health():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "assessment-engine",
        "version": SERVICE_VERSION,
        "environment": settings.environment.value
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Assessment Engine",
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
