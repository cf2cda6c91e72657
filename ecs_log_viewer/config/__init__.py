from .config import LogViewerConfig

__all__ = ["LogViewerConfig"]
