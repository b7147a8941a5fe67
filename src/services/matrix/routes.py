"""Review matrix routes."""

from fastapi import APIRouter, Header
from loguru import logger

from src.core.schemas.responses import ApiResponse
from src.core.security import extract_bearer_token
from src.services.matrix.schemas import Organization
from src.services.matrix.service import fetch_organization_data

router = APIRouter()


@router.get(
    "/organizations/{organization}/review-matrix",
    response_model=ApiResponse[Organization],
)
async def get_review_matrix(
    organization: str,
    authorization: str | None = Header(default=None),
) -> ApiResponse[Organization]:
    """Fetch which open pull requests each reviewer is assigned to, per repository."""
    token = extract_bearer_token(authorization)

    logger.info(f"Review matrix requested for {organization}")
    result = await fetch_organization_data(organization, token)

    return ApiResponse[Organization](
        data=result,
        message=f"{len(result.reviewers)} reviewers across {len(result.repositories)} repositories",
    )
