"""
API endpoints for validating, repairing and formatting generated test code.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from ..models.code_repair import RepairResult
from ..services.code_validator import CodeValidatorService

logger = logging.getLogger(__name__)

router = APIRouter()


class CodeValidationRequest(BaseModel):
    """Request model for code validation."""
    code: Optional[str] = None
    is_partial: bool = False


class CodeValidationResponse(RepairResult):
    """Repair result plus the request outcome flag."""
    success: bool = True


class CodeFormatRequest(BaseModel):
    """Request model for code formatting."""
    code: Optional[str] = None


class CodeFormatResponse(BaseModel):
    """Response model for code formatting."""
    success: bool = True
    formatted_code: str


@router.post("/validate", response_model=CodeValidationResponse)
async def validate_code(request: CodeValidationRequest) -> CodeValidationResponse:
    """
    Validate and repair code.

    Fragments (is_partial=True) keep their open blocks; complete files get
    missing closers appended and trailing debris removed.
    """
    if request.code is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Code is required")

    try:
        result = CodeValidatorService().validate_and_fix(request.code, request.is_partial)
        return CodeValidationResponse(success=True, **result.model_dump())
    except Exception as e:
        logger.error(f"❌ Code validation request failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.post("/format", response_model=CodeFormatResponse)
async def format_code(request: CodeFormatRequest) -> CodeFormatResponse:
    """Re-indent code with the configured indent unit."""
    if request.code is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Code is required")

    try:
        formatted = CodeValidatorService().format_code(request.code)
        return CodeFormatResponse(success=True, formatted_code=formatted)
    except Exception as e:
        logger.error(f"❌ Code formatting request failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
