[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wclkit"
version = "0.1.0"
description = "Everyday helpers: sets, stacks, JSON, networking, files, HTTP(S), logging, images and SSH."
requires-python = ">=3.10"
keywords = [
    "utilities",
    "sets",
    "json",
    "networking",
    "http",
    "tls",
    "logging",
    "images",
    "ssh",
    "ftp",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Internet",
    "Topic :: System :: Networking",
    "Topic :: Utilities",
]
dependencies = [
    "requests",
    "pillow",
    "paramiko",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["wclkit"]

[tool.hatch.build.targets.sdist]
include = [
    "wclkit",
    "tests",
    "README.md",
    "pyproject.toml",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
