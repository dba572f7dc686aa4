# Utilities

from .debounce import Debouncer

__all__ = ["Debouncer"]
