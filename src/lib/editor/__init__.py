from .surface import EditorSurface, TextBuffer

__all__ = ["EditorSurface", "TextBuffer"]
