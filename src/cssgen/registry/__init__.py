"""Generated class registry: rendering and loading."""

from cssgen.registry.emit import RenderedRegistry, render_registry, write_registry
from cssgen.registry.load import Registry, load_registry, parse_registry

__all__ = [
    "Registry",
    "RenderedRegistry",
    "load_registry",
    "parse_registry",
    "render_registry",
    "write_registry",
]
