[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hashtab"
version = "0.1.0"
description = "File hash helpers: sumfile parsing, hash string handling, settings and VirusTotal lookups"
requires-python = ">=3.11"
dependencies = []
keywords = ["hash", "checksum", "sumfile", "sfv", "md5", "sha256", "virustotal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hashtab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
