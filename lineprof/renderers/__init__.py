"""Report renderers."""

from .base import Renderer
from .html import HTMLRenderer
from .text import TextRenderer

__all__ = ["Renderer", "HTMLRenderer", "TextRenderer"]
