from .bytes import BytesViewer
from .text import TextViewer

__all__ = ["BytesViewer", "TextViewer"]
