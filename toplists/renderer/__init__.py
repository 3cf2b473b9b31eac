"""Renderer for the merged list output."""

from toplists.renderer.io import AtomicWriter
from toplists.renderer.json_renderer import JsonRenderer, render_json
from toplists.renderer.models import GeneratedFile


__all__ = [
    "AtomicWriter",
    "GeneratedFile",
    "JsonRenderer",
    "render_json",
]
