"""Utility modules for the text workbench.

This package contains shared helpers:
- frontmatter.py: YAML frontmatter and first-line splitting
- protection.py: shielding frontmatter/header around a strategy run
"""
