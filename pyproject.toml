[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textforge"
version = "0.1.0"
description = "HTTP service that transforms and generates text through a chat-completion model, with an on-disk result cache"
requires-python = ">=3.10"
keywords = ["text", "transform", "generate", "chat-completion", "http", "cache", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Text Processing",
]
dependencies = [
    "flask",
    "httpx",
    "pyyaml",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
]

[project.scripts]
textforge = "textforge.app:main"

[tool.hatch.build.targets.wheel]
packages = ["textforge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
