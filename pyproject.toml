[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wafops"
version = "0.1.0"
description = "Rule-language transformations and operators for web application firewall engines"
requires-python = ">=3.10"
dependencies = [
    "regex",
]
keywords = [
    "waf",
    "firewall",
    "security",
    "http",
    "transformations",
    "operators",
    "seclang",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Security",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["wafops"]

[tool.hatch.build.targets.sdist]
include = [
    "wafops",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
