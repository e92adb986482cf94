"""Graphics workbench: wireframe rasterizer, ray tracer and design-pattern demos."""

__version__ = "0.1.0"