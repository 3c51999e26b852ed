[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xmltoken"
version = "0.1.0"
description = "Byte-level XML helpers: UTF-8/UTF-16/Latin-1 conversion, encoding detection and XML declaration parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "encoding", "utf-8", "utf-16", "latin-1", "xml-declaration"]
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
    "Topic :: Text Processing :: Markup :: XML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xmltoken"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
