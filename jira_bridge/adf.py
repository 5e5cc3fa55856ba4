# jira_bridge/adf.py
"""
Minimal ADF (Atlassian Document Format) builders for comment bodies.
Text goes in as data: it is never parsed as markup.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable


def text_node(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


def paragraph(text: str) -> Dict[str, Any]:
    return {"type": "paragraph", "content": [text_node(text)]}


def document(blocks: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "doc", "version": 1, "content": list(blocks)}


def comment_document(text: str) -> Dict[str, Any]:
    """Single-paragraph document holding ``text`` verbatim."""
    return document([paragraph(text)])
