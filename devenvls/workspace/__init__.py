"""Per-document state for devenvls."""
from .document_store import CursorPosition, DocumentStore

__all__ = ['CursorPosition', 'DocumentStore']
