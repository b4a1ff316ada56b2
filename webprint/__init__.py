"""WebPrint - print web content to paginated PDF."""

__version__ = "0.1.0"
