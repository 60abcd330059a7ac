[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "minish"
version = "0.1.0"
description = "Core of a small shell: tokenizer, environment handling, builtins and a pipeline executor"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "tokenizer", "builtins", "pipeline", "environment"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["minish*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
