from .client import PlateScan

__all__ = ["PlateScan"]

__version__ = '0.1.0'
