[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cloudadmin"
version = "0.1.0"
description = "Library for administering projects, tenants, volumes and machine reservations of a cloud API"
requires-python = ">=3.10"
keywords = [
    "cloud",
    "administration",
    "projects",
    "tenants",
    "volumes",
    "machine-reservations",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "pyyaml>=6.0",
    "pyjwt>=2.6",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["cloudadmin"]

[tool.hatch.build.targets.sdist]
include = [
    "cloudadmin",
    "tests",
    "pyproject.toml",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
