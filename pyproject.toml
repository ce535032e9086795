[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hyperwire"
version = "0.1.0"
description = "Asyncio building blocks for HTTP clients: streams with delayed TLS, DNS ordering, protocol selection and mocks"
requires-python = ">=3.11"
dependencies = []
keywords = ["http", "client", "asyncio", "tls", "dns", "stream", "mock"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["hyperwire"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
