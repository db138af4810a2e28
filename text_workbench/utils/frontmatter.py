"""YAML frontmatter parsing and splitting utilities.

Frontmatter format:
---
title: Draft
tags: [notes]
---

# Note content here...

``split_frontmatter`` and ``split_header`` are lossless: concatenating
their two parts always gives back the input.
"""

import re
from typing import Any

import yaml  # type: ignore[import-untyped]

FRONTMATTER_DELIMITER = "---"

# Delimiter line, optional block content, delimiter line, then newline or end
FRONTMATTER_PATTERN = re.compile(r"\A---\n(?:(.*?)\n)?---(?:\n|\Z)", re.DOTALL)


def split_frontmatter(text: str) -> tuple[str, str]:
    """Split ``text`` into ``(frontmatter, body)``.

    The frontmatter part keeps both delimiter lines and the newline that
    follows the closing one. Returns ``("", text)`` when no block is present.
    """
    if not text or not text.startswith(FRONTMATTER_DELIMITER):
        return "", text
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return "", text
    return match.group(0), text[match.end() :]


def has_frontmatter(text: str) -> bool:
    return bool(split_frontmatter(text)[0])


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter from Markdown content.

    Args:
        content: Full note content that may contain frontmatter

    Returns:
        Tuple of (metadata dict, content without frontmatter).
        Returns an empty dict if no frontmatter is present or it is not a
        YAML mapping.
    """
    block, body = split_frontmatter(content)
    if not block:
        return {}, content

    match = FRONTMATTER_PATTERN.match(block)
    yaml_block = (match.group(1) if match else None) or ""
    try:
        metadata = yaml.safe_load(yaml_block)
    except yaml.YAMLError:
        # Invalid YAML - return empty metadata but preserve content
        return {}, content

    if not isinstance(metadata, dict):
        metadata = {}
    return metadata, body


def split_header(text: str) -> tuple[str, str]:
    """Split off the first line, newline included, as ``(header, body)``.

    An empty text or a first line made only of whitespace is not split.
    """
    if not text:
        return "", text
    newline = text.find("\n")
    first_line = text if newline < 0 else text[:newline]
    if not first_line.strip():
        return "", text
    if newline < 0:
        return text, ""
    return text[: newline + 1], text[newline + 1 :]
