"""Standalone HTML page for the interactive API reference viewer."""

import html
import json
from typing import Any

VIEWER_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/@scalar/api-reference"

PAGE_TEMPLATE = """<!doctype html>
<html>
  <head>
    <title>{title}</title>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
  </head>
  <body>
    <div id="app"></div>
    <script src="{script_url}"></script>
    <script>
      Scalar.createApiReference("#app", {configuration});
    </script>
  </body>
</html>
"""


def viewer_configuration(
    content: Any, theme: str = "default", layout: str = "modern", show_sidebar: bool = True
) -> dict:
    return {"content": content, "theme": theme, "layout": layout, "showSidebar": show_sidebar}


def render_html(
    title: str, content: Any, theme: str = "default", layout: str = "modern", show_sidebar: bool = True
) -> str:
    """Render a normalized document as a self-contained reference page."""
    configuration = json.dumps(
        viewer_configuration(content, theme=theme, layout=layout, show_sidebar=show_sidebar),
        ensure_ascii=False,
        default=str,
    )
    # Keep the inline script from being closed by document text
    configuration = configuration.replace("</", "<\\/")
    return PAGE_TEMPLATE.format(
        title=html.escape(title),
        script_url=VIEWER_SCRIPT_URL,
        configuration=configuration,
    )
