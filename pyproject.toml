[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hdbwire"
version = "0.111.2"
description = "Wire-level building blocks for the HANA SQL command network protocol: field encodings, authentication, server errors and value conversions"
requires-python = ">=3.10"
dependencies = []
keywords = ["hana", "hdb", "database", "protocol", "scram", "jwt", "cesu-8", "decimal128"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hdbwire"]

[tool.hatch.build.targets.sdist]
include = ["hdbwire", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
