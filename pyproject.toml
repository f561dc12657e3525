[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "siaod"
version = "0.1.0"
description = "Classic data structures: extendible and perfect hashing, MinHash, B-tree and k-d tree"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "data structures",
    "hashing",
    "extendible hashing",
    "perfect hashing",
    "minhash",
    "b-tree",
    "kd-tree",
    "nearest neighbour",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
siaod = "siaod.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["siaod"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
