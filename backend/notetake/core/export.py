import html

import markdown

from notetake.core.records import ResolvedNote

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists", "nl2br"]

PRINT_CSS = """
body {
  font-family: Arial, sans-serif;
  margin: 0.5in;
}
.markdown-body {
  max-width: 100%;
  word-wrap: break-word;
}
a {
  color: blue;
  text-decoration: underline;
}
img {
  max-width: 500px;
  max-height: 400px;
  object-fit: contain;
  display: inline-block;
}
img, a {
  page-break-inside: avoid;
  break-inside: avoid;
}
"""


def render_markdown(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def render_note_html(note: ResolvedNote, base_href: str = "") -> str:
    """Full standalone HTML document for a note, ready for the PDF renderer."""
    base = f'<base href="{html.escape(base_href, quote=True)}" />' if base_href else ""
    title = html.escape(note.title or "Note")
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        f"    {base}\n"
        '    <meta charset="utf-8" />\n'
        f"    <title>{title}</title>\n"
        f"    <style>{PRINT_CSS}</style>\n"
        "  </head>\n"
        "  <body>\n"
        '    <div class="markdown-body">\n'
        f"{render_markdown(note.markdown)}\n"
        "    </div>\n"
        "  </body>\n"
        "</html>\n"
    )


def export_filename(note: ResolvedNote) -> str:
    return f"{note.title or 'note'}.pdf"
