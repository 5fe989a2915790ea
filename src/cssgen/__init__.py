"""cssgen - CSS class registry generator and class usage linter."""

__version__ = "0.1.0"
