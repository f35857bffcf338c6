"""External collaborators that never gate the frame loop."""

from .commentary import CommentaryService

__all__ = ['CommentaryService']
