[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scivis"
version = "0.1.0"
description = "Vector and matrix math, colour conversion, meshes, images and scalar grids for visualization work"
requires-python = ">=3.10"
dependencies = []
keywords = ["visualization", "graphics", "linear algebra", "tesselation", "image", "mesh", "color"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scivis"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
