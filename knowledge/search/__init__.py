from .ranking import rank_documents, relevance

__all__ = ["rank_documents", "relevance"]
