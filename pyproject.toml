[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gfxlab"
version = "0.1.0"
description = "A small graphics workbench: a wireframe rasterizer, a BVH-accelerated Whitted ray tracer with an OBJ loader, and a few classic design-pattern demos."
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = [
    "graphics",
    "rasterizer",
    "ray tracing",
    "bvh",
    "obj",
    "design patterns",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Education",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gfxlab-raster = "gfxlab.raster.app:main"
gfxlab-raytrace = "gfxlab.raytrace.renderer:main"
gfxlab-command = "gfxlab.patterns.command:main"
gfxlab-mediator = "gfxlab.patterns.mediator:main"
gfxlab-strategy = "gfxlab.patterns.strategy:main"

[tool.hatch.build.targets.wheel]
packages = ["gfxlab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
