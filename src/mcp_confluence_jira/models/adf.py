"""
Atlassian Document Format (ADF) helpers.

Jira Cloud's v3 API takes and returns long-text fields such as
``description`` as ADF documents instead of plain strings.
"""

from typing import Any

ADF_VERSION = 1


def to_rich_text(text: str | None) -> dict[str, Any] | None:
    """
    Wrap plain text as a one-paragraph ADF document.

    Args:
        text: Plain text, or None

    Returns:
        ADF document dict, or None for empty or absent input
    """
    if not text:
        return None

    return {
        "version": ADF_VERSION,
        "type": "doc",
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def adf_to_text(adf_content: dict | list | str | None) -> str | None:
    """
    Convert ADF content back to plain text.

    Paragraph-level nodes are joined with newlines; plain strings pass
    through unchanged, so converting an already converted value is a no-op.
    """
    if adf_content is None:
        return None

    if isinstance(adf_content, str):
        return adf_content

    if isinstance(adf_content, list):
        texts = [text for item in adf_content if (text := adf_to_text(item))]
        return "\n".join(texts) if texts else None

    if isinstance(adf_content, dict):
        node_type = adf_content.get("type")
        if node_type == "text":
            return adf_content.get("text", "")
        if node_type == "hardBreak":
            return "\n"

        content = adf_content.get("content")
        if not content:
            return None
        # Inline runs inside one block belong on the same line
        if all(
            isinstance(child, dict) and child.get("type") in ("text", "hardBreak")
            for child in content
        ):
            return "".join(adf_to_text(child) or "" for child in content) or None
        return adf_to_text(content)

    return None
