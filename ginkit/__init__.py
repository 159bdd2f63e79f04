"""HTTP routing tree, router groups, response renderers, response writer and log formatting."""

__version__ = "1.7.7"