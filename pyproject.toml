[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "floc"
version = "2.0.0"
description = "Orchestrate jobs running in threads with one entry point and one exit point."
requires-python = ">=3.10"
dependencies = []
keywords = ["flow", "orchestration", "concurrency", "threads", "jobs", "workflow"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["floc"]

[tool.pytest.ini_options]
addopts = "-ra"
