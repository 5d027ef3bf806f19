"""
Custom exceptions and error handling for the Assessment Engine
"""
from typing import Optional, Dict, Any


class AssessmentError(Exception):
    """Base exception for the Assessment Engine"""

    code = "assessment_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidQuota(AssessmentError):
    """Quota requested with no categories or a non-positive total"""

    code = "invalid_quota"


class InvalidGenerationRequest(AssessmentError):
    """Generation request rejected before any prompt is built"""

    code = "invalid_generation_request"


class MalformedQuestion(AssessmentError):
    """Question data is structurally broken and cannot be scored"""

    code = "malformed_question"

    def __init__(self, question_id: Optional[str], reason: str, details: Optional[Dict[str, Any]] = None):
        merged = {"question_id": question_id, "reason": reason}
        merged.update(details or {})
        super().__init__(f"Question {question_id!r} is malformed: {reason}", merged)
        self.question_id = question_id
        self.reason = reason
