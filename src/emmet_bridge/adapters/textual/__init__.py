"""Textual integration: expose a ``TextArea`` as a bridge host."""

from .host import TextAreaHost

__all__ = ["TextAreaHost"]
