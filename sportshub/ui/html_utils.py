"""Utilities for preparing HTML snippets before rendering in Streamlit."""
from html import escape
from textwrap import dedent
from typing import Iterable


def html_block(template: str) -> str:
    """
    Normalize multi-line HTML so Streamlit doesn't treat it as Markdown code.

    Streamlit's Markdown renderer interprets lines with >=4 leading spaces as
    code blocks. We dedent and strip leading whitespace on each line to avoid
    that while keeping the markup intact.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def html_list(lines: Iterable[str]) -> str:
    """Render text lines as an escaped <ul>."""
    items = "".join(f"<li>{escape(line)}</li>" for line in lines)
    return f"<ul>{items}</ul>"
