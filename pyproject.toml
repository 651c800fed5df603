[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphviz-studio"
version = "0.1.0"
description = "Interactive graph editor with step-by-step minimum spanning tree visualisation"
requires-python = ">=3.10"
keywords = ["graph", "visualization", "kruskal", "boruvka", "minimum-spanning-tree", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
graphviz-studio = "graphviz_studio.app:main"

[tool.hatch.build.targets.wheel]
packages = ["graphviz_studio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
