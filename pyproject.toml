[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ginkit"
version = "1.7.7"
description = "Radix-tree HTTP routing, router groups, response renderers and request log formatting"
requires-python = ">=3.10"
keywords = ["http", "router", "radix-tree", "middleware", "render", "logging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "jinja2",
    "msgpack",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ginkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
