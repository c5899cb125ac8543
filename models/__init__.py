from .progress import ProgressUpdate
from .note import NoteCreate

__all__ = ['ProgressUpdate', 'NoteCreate']
