"""
Structured logging and monitoring for the Assessment Engine
"""
import sys
import time
from functools import wraps
from typing import Optional, Callable
from contextvars import ContextVar
import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from prometheus_client import Counter, Histogram
import logging

from app.config import settings

# Context variables for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
attempt_id_var: ContextVar[Optional[str]] = ContextVar("attempt_id", default=None)

# Prometheus metrics
questions_graded = Counter("questions_graded_total", "Total questions graded", ["kind", "status"])
attempts_scored = Counter("attempts_scored_total", "Total attempts scored", ["policy", "status"])
attempt_duration = Histogram("attempt_scoring_duration_seconds", "Attempt scoring duration", ["policy"])
quota_allocations = Counter("quota_allocations_total", "Total quota allocations", ["status"])
generation_plans = Counter("generation_plans_total", "Total generation plans", ["status"])


def add_request_context(logger, method_name, event_dict):
    """Add request context to log events"""
    request_id = request_id_var.get()
    attempt_id = attempt_id_var.get()

    if request_id:
        event_dict["request_id"] = request_id
    if attempt_id:
        event_dict["attempt_id"] = attempt_id

    # Add service metadata
    event_dict["service"] = "assessment-engine"
    event_dict["environment"] = settings.environment.value

    return event_dict


def setup_logging():
    """Configure structured logging for the application"""

    # Configure Python logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper())
    )

    # Configure structlog
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_request_context,
        CallsiteParameterAdder(
            parameters=[CallsiteParameter.FILENAME, CallsiteParameter.LINENO]
        ),
        structlog.processors.UnicodeDecoder(),
    ]

    # Use JSON in production
    if settings.log_format == "json" or settings.is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """Get a configured logger instance"""
    return structlog.get_logger(name)


def log_execution_time(func: Callable) -> Callable:
    """Decorator to log and measure function execution time"""
    logger = get_logger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error("function_error",
                         function=func.__name__,
                         duration_seconds=time.time() - start_time,
                         error=str(e),
                         error_type=type(e).__name__)
            raise
        logger.debug("function_success",
                     function=func.__name__,
                     duration_seconds=time.time() - start_time)
        return result

    return wrapper


class MetricsLogger:
    """Helper class for logging with metrics"""

    def __init__(self, logger: structlog.BoundLogger):
        self.logger = logger

    def log_question_graded(self, kind: str, status: str):
        questions_graded.labels(kind=kind, status=status).inc()

    def log_attempt_scored(self, policy: str, duration: float, total_questions: int,
                           percentage_score: int, passed: bool):
        """Log a completed attempt"""
        attempts_scored.labels(policy=policy, status="success").inc()
        attempt_duration.labels(policy=policy).observe(duration)
        self.logger.info("attempt_scored",
                         policy=policy,
                         total_questions=total_questions,
                         percentage_score=percentage_score,
                         passed=passed,
                         duration_seconds=duration)

    def log_attempt_rejected(self, policy: str, error: str):
        attempts_scored.labels(policy=policy, status="rejected").inc()
        self.logger.warning("attempt_rejected",
                            policy=policy,
                            error=error)

    def log_quota_allocated(self, total: int, categories: int):
        quota_allocations.labels(status="success").inc()
        self.logger.debug("quota_allocated",
                          total=total,
                          categories=categories)

    def log_quota_rejected(self, error: str):
        quota_allocations.labels(status="rejected").inc()
        self.logger.warning("quota_rejected", error=error)

    def log_generation_plan(self, question_count: int, per_document: int, success: bool = True):
        """Log a generation plan outcome"""
        status = "success" if success else "rejected"
        generation_plans.labels(status=status).inc()
        if success:
            self.logger.info("generation_planned",
                             question_count=question_count,
                             per_document=per_document)
        else:
            self.logger.warning("generation_plan_rejected",
                                question_count=question_count)


# Initialize logging on module import
setup_logging()

# Create default logger
logger = get_logger(__name__)
metrics_logger = MetricsLogger(logger)
