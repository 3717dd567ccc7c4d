"""Built-in tools shipped with the library."""

from .scroll_to_location import ScrollToLocationTool

__all__ = ["ScrollToLocationTool"]
