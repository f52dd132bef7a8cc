"""Object model adapters: resolution order and method classification"""
from .python_model import PythonObjectModel

__all__ = ["PythonObjectModel"]
