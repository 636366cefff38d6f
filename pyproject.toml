[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "wilayahtree"
version = "0.1.0"
description = "Interactive manager for a hierarchy of administrative regions stored as JSON"
requires-python = ">=3.10"
dependencies = []
keywords = ["hierarchy", "tree", "json", "administrative regions", "undo", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Indonesian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wilayahtree = "wilayahtree.cli:main"

[tool.setuptools.packages.find]
include = ["wilayahtree*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
