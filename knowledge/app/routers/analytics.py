from fastapi import APIRouter, Depends

from knowledge.app.auth import require_reader
from knowledge.app.models import AnalyticsResponse
from knowledge.db.analytics import get_counts
from knowledge.models import User

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsResponse)
def read_analytics(user: User = Depends(require_reader)) -> AnalyticsResponse:
    """Dashboard counts. Documents are counted as the caller sees them."""
    return AnalyticsResponse(**get_counts(user))
