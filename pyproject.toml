[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "satphys"
version = "0.1.0"
description = "Separating-axis collision detection for boxes and planes, a uniform broad-phase grid, messages and a follow camera"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["physics", "collision detection", "separating axis theorem", "aabb", "broad phase", "camera"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["satphys"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
