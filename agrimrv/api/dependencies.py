"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from agrimrv.config import calibration_from_settings
from agrimrv.domain.calibration import Calibration
from agrimrv.infrastructure.clients.ai_service import AIServiceClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_ai_client() -> AIServiceClient:
    """Provide AI classification service client instance"""
    return AIServiceClient()


def get_calibration() -> Calibration:
    """Provide scoring calibration from configured settings"""
    return calibration_from_settings()
