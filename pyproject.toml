[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "benchconductor"
version = "0.1.0"
description = "Discover Go benchmark functions shared by two versions of a code base and record their results as CSV or JSON"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "benchmark",
    "microbenchmark",
    "performance",
    "regression",
    "go",
    "csv",
    "json",
]
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
    "Topic :: System :: Benchmark",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["benchconductor"]

[tool.pytest.ini_options]
addopts = "-ra"
