from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EditorSurface(Protocol):
    """補正結果を書き戻す編集面のインターフェース。"""

    def get_document_text(self) -> str:
        ...

    def get_selected_text(self) -> str:
        ...

    def replace_document_text(self, text: str) -> None:
        ...

    def replace_selection(self, text: str) -> None:
        ...


class TextBuffer:
    """メモリ上の文書と選択範囲 (start, end) を保持する編集面。"""

    def __init__(self, text: str = "", selection: tuple[int, int] | None = None) -> None:
        self._text = text
        self._selection = (0, 0)
        if selection is not None:
            self.select(*selection)

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> tuple[int, int]:
        return self._selection

    def select(self, start: int, end: int) -> None:
        if not (0 <= start <= end <= len(self._text)):
            raise ValueError(f"selection out of range: start={start}, end={end}, length={len(self._text)}")
        self._selection = (start, end)

    def get_document_text(self) -> str:
        return self._text

    def get_selected_text(self) -> str:
        start, end = self._selection
        return self._text[start:end]

    def replace_document_text(self, text: str) -> None:
        self._text = text
        self._selection = (0, 0)

    def replace_selection(self, text: str) -> None:
        start, end = self._selection
        self._text = self._text[:start] + text + self._text[end:]
        self._selection = (start, start + len(text))


__all__ = ["EditorSurface", "TextBuffer"]
