"""
Template library - bundled and project progression templates.
"""

from dust_chords.templates.loader import TemplateLoader

__all__ = ["TemplateLoader"]
