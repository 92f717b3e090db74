[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exhaust"
version = "0.2.4"
description = "Iterate over every possible value of a type (exhaustive enumeration)."
requires-python = ">=3.10"
dependencies = []
keywords = ["exhaustive", "enumeration", "iteration", "testing", "combinatorics"]
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
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["exhaust"]

[tool.hatch.build.targets.sdist]
include = ["exhaust", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
