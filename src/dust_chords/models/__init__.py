"""
Pydantic models for configuration files.
"""

from dust_chords.models.template import TemplateConfig

__all__ = ["TemplateConfig"]
