"""Editor context carried alongside a query."""

from snippetrag.context.editor import EditorContext, LineRange

__all__ = ["EditorContext", "LineRange"]
