"""Document search."""

from fastapi import APIRouter, Depends

from knowledge.access import list_visible
from knowledge.app.auth import require_reader
from knowledge.db.documents import get_visible_documents, search_documents
from knowledge.models import SearchResult, User
from knowledge.search import rank_documents

router = APIRouter(prefix="/search", tags=["search"])

UNFILTERED_LIMIT = 100


@router.get("", response_model=list[SearchResult])
def search(
    q: str = "",
    user: User = Depends(require_reader),
) -> list[SearchResult]:
    """Search titles, content text and descriptions.

    Title matches rank above content matches, which rank above description
    matches; ties go to the newest document. An empty query returns the most
    recent documents.
    """
    query = q.strip()
    if not query:
        documents = get_visible_documents(user, limit=UNFILTERED_LIMIT)
        return [
            SearchResult(**doc.model_dump()) for doc in list_visible(documents, user)
        ]

    ranked = rank_documents(search_documents(query, user), query)
    return list_visible(ranked, user)
