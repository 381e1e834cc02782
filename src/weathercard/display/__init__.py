"""Display rendering modules."""

from weathercard.display.render import CardRenderer, TemplateRenderer, render_text

__all__ = ["CardRenderer", "TemplateRenderer", "render_text"]
