from .package import Package
from .settings import Settings, settings

__all__ = ["Package", "Settings", "settings"]
