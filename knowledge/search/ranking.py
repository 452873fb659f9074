from datetime import datetime, timezone

from knowledge.models import Document, SearchResult

TITLE_MATCH = 3
CONTENT_MATCH = 2
DESCRIPTION_MATCH = 1


def relevance(document: Document, query: str) -> int | None:
    """
    Score how well a document matches a query.

    A title match beats a content-text match, which beats a description match.
    Each document counts once, at its best match.

    Returns:
        The score, or None if no field contains the query.
    """
    needle = query.strip().lower()
    if not needle:
        return None
    if needle in document.title.lower():
        return TITLE_MATCH
    if document.content_text and needle in document.content_text.lower():
        return CONTENT_MATCH
    if document.description and needle in document.description.lower():
        return DESCRIPTION_MATCH
    return None


def rank_documents(documents: list[Document], query: str) -> list[SearchResult]:
    """Rank matching documents by relevance, newest first within equal relevance.

    Documents that match no field are dropped.
    """
    results = []
    for document in documents:
        score = relevance(document, query)
        if score is None:
            continue
        results.append(SearchResult(**document.model_dump(), relevance=score))

    results.sort(key=lambda r: (r.relevance or 0, _timestamp(r.created_at)), reverse=True)
    return results


def _timestamp(value: datetime) -> float:
    # Naive datetimes from the database are UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()
