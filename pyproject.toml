[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wellknown"
version = "0.13.5"
description = "Protocol Buffers well-known Timestamp and Duration types with RFC 3339 and JSON string formats"
requires-python = ">=3.10"
dependencies = []
keywords = ["protobuf", "timestamp", "duration", "rfc3339", "well-known-types"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["wellknown"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
