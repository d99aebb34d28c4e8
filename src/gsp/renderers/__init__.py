"""GSP renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- MarkupRenderer: Renders AST to HTML or XML using StringBuilder pattern

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from gsp.renderers.markup import MarkupRenderer, escape_attr, escape_text

__all__ = ["MarkupRenderer", "escape_attr", "escape_text"]
