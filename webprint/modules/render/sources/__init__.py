"""Content sources the render pipeline can print from."""

from .base import ContentSource
from .webview import WebViewContentSource

__all__ = ["ContentSource", "WebViewContentSource"]
