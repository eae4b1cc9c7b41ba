from .size_formatter import format_size

__all__ = ["format_size"]
