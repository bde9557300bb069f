"""podhtml renderers.

Renderers turn the flat token sequence into an output format.

Available Renderers:
- HtmlRenderer: Renders tokens to HTML using StringBuilder pattern

Thread Safety:
Renderers use a StringBuilder local to each render() call.

"""

from podhtml.renderers.html import HeadingInfo, HtmlRenderer
from podhtml.renderers.protocol import TokenRenderer

__all__ = ["HeadingInfo", "HtmlRenderer", "TokenRenderer"]
