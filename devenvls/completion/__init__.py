"""Option name completion for devenvls."""
from .types import CompletionCandidate

__all__ = ['CompletionCandidate']
