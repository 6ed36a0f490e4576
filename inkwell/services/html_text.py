"""Small helpers for producing and reducing HTML text."""


def html_encode(text: str) -> str:
    """Escape text for use between tags (``&`` and ``<`` only)."""
    return text.replace("&", "&amp;").replace("<", "&lt;")


def quote_attribute(html: str) -> str:
    """Make already-encoded HTML text safe inside a double-quoted attribute."""
    return html.replace('"', "&quot;")


def escape_attribute(value: str) -> str:
    """Escape a raw value for use inside a double-quoted attribute."""
    return quote_attribute(html_encode(value))


def strip_tags(html: str) -> str:
    """Drop everything inside ``<...>`` spans, keeping the text around them."""
    out: list[str] = []
    inside_tag = False
    for char in html:
        if char == "<":
            inside_tag = True
        elif char == ">" and inside_tag:
            inside_tag = False
        elif not inside_tag:
            out.append(char)
    return "".join(out)
