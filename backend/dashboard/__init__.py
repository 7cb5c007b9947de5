"""Projects Dashboard: REST backend for tracking projects, tasks and comments."""

__version__ = "0.1.0"
__author__ = "Projects Dashboard Team"

__all__ = ["__version__", "__author__"]
