[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gblog"
version = "0.1.0"
description = "A command-line tool for writing a blog whose posts are published as GitHub Gists"
requires-python = ">=3.10"
keywords = ["blog", "gist", "markdown", "cli", "github"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    "Topic :: Utilities",
]
dependencies = [
    "click",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gblog = "gblog.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gblog"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
