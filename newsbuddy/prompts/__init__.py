"""Prompt templates."""

from .loader import render, template_names

__all__ = ["render", "template_names"]
