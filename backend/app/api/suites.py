"""
API endpoints for generating Cypress spec files from test cases.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from ..models.test_suite import SuiteGenerationRequest, SuiteGenerationResult
from ..services.suite_generator import SuiteGeneratorService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-suite", response_model=SuiteGenerationResult)
async def generate_suite(request: SuiteGenerationRequest) -> SuiteGenerationResult:
    """
    Generate one spec file from a list of test cases.

    When no preliminary code is sent but a session_id is, the code saved for
    that session is used instead.
    """
    logger.info("🔔 POST /api/test-generator/generate-suite")
    try:
        return SuiteGeneratorService().generate_test_suite(request)
    except ValueError as e:
        logger.error(f"❌ Suite request rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Suite generation failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate test suite: {str(e)}"
        )
