"""Inkwell static site generator.

This package turns a directory of Markdown posts with YAML metadata headers
into a static site rendered through Jinja2 templates: one page per public
post plus an index page listing them, most recent first.

The main entry point is the CLI module; ``inkwell.build.run_build`` runs a
build programmatically.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
