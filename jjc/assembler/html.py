"""
Wraps an assembled program in a standalone HTML page.
"""

import html

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<script>
{program}
</script>
</body>
</html>
"""


def wrap_html(program: str, title: str = "jj") -> str:
    """Return an HTML5 document that runs ``program`` when loaded."""
    # A literal '</script>' inside the program would end the element early
    program = program.replace("</script", "<\\/script")
    return HTML_TEMPLATE.format(title=html.escape(title), program=program)
