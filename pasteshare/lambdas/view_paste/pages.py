"""HTML pages served by the `/p/{id}` route

All user-supplied text is escaped with `html.escape` before it is placed in
markup, so paste content is always displayed verbatim and never executed.
"""

import html

from pasteshare.models import PasteView


STYLE = """
    body { margin: 0; padding: 20px; background-color: #f5f5f5; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }
    .container { max-width: 900px; margin: 0 auto; background-color: white; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); overflow: hidden; }
    .header { background-color: #0070f3; color: white; padding: 20px 30px; }
    .header h1 { font-size: 24px; margin: 0 0 5px 0; }
    .header p { font-size: 14px; margin: 0; opacity: 0.9; }
    .body { padding: 30px; }
    .content { background-color: #f8f9fa; border: 1px solid #e1e4e8; border-radius: 6px; padding: 20px; font-family: monospace; font-size: 14px; line-height: 1.6; white-space: pre-wrap; word-wrap: break-word; overflow-x: auto; }
    .meta { margin-top: 20px; padding: 15px; background-color: #f0f7ff; border-left: 4px solid #0070f3; font-size: 14px; }
    .meta p { margin: 5px 0; }
"""


def render_paste_page(paste_id: str, view: PasteView) -> str:
    """Render a paste with its view counter and expiry (when they apply)"""
    meta = []
    if view.remaining_views is not None:
        meta.append(f'<p><strong>Views:</strong> {view.view_count} / {view.max_views} ({view.remaining_views} remaining)</p>')
    if view.expires_at is not None:
        meta.append(f'<p><strong>Expires:</strong> <time datetime="{view.expires_at}">{view.expires_at}</time></p>')
    meta_html = f'<div class="meta">{"".join(meta)}</div>' if meta else ''

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Paste {html.escape(paste_id)}</title>
    <style>{STYLE}</style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Paste View</h1>
            <p>ID: {html.escape(paste_id)}</p>
        </div>
        <div class="body">
            <div class="content">{html.escape(view.content)}</div>
            {meta_html}
        </div>
    </div>
</body>
</html>"""


def render_not_found_page() -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Paste not found</title>
    <style>{STYLE}</style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>404 - Paste not found</h1>
        </div>
        <div class="body">
            <p>This paste does not exist, has expired, or has reached its view limit.</p>
        </div>
    </div>
</body>
</html>"""
