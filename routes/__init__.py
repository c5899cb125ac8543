# Routes package __init__.py - re-exports routers for main.py convenience
from .surahs import router as surahs_router
from .progress import router as progress_router
from .notes import router as notes_router
from .populate import router as populate_router

__all__ = ['surahs_router', 'progress_router', 'notes_router', 'populate_router']
