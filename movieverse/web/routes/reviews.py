"""
Routes des critiques et de leurs reponses.
"""

from fastapi import APIRouter, Depends, status

from ...services.reviews import ReviewService
from ..deps import get_review_service
from ..schemas import ReviewIn, ReviewOut

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post(
    "/{source}/{external_id}",
    response_model=ReviewOut,
    status_code=status.HTTP_201_CREATED,
)
def submit_review(
    source: str,
    external_id: str,
    body: ReviewIn,
    reviews: ReviewService = Depends(get_review_service),
):
    review = reviews.submit_review(source, external_id, body.text, body.name, body.email)
    return ReviewOut.model_validate(review)


@router.post(
    "/{source}/{external_id}/reply/{review_id}",
    response_model=ReviewOut,
    status_code=status.HTTP_201_CREATED,
)
def submit_reply(
    source: str,
    external_id: str,
    review_id: str,
    body: ReviewIn,
    reviews: ReviewService = Depends(get_review_service),
):
    review = reviews.submit_reply(
        source, external_id, review_id, body.text, body.name, body.email
    )
    return ReviewOut.model_validate(review)


@router.get("/{source}/{external_id}", response_model=list[ReviewOut])
def list_reviews(
    source: str,
    external_id: str,
    reviews: ReviewService = Depends(get_review_service),
):
    """Critiques d'un film, la plus recente en premier."""
    return [ReviewOut.model_validate(r) for r in reviews.list_reviews(source, external_id)]
