[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "homeregistry"
version = "0.1.0"
description = "A small HTTP service for keeping a registry of houses, rooms and smart devices in SQLite"
requires-python = ">=3.10"
keywords = ["smart-home", "registry", "rest", "sqlite", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Home Automation",
]
dependencies = [
    "flask",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
    "werkzeug",
]

[project.scripts]
homeregistry-server = "homeregistry.app:main"
homeregistry-demo = "homeregistry.client:main"

[tool.hatch.build.targets.wheel]
packages = ["homeregistry"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
