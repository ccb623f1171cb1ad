[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinycomp"
version = "0.1.0"
description = "A small compiler front end: lexer, Pratt parser, AST dumps and three-address code generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "parser", "pratt", "ast", "three-address-code", "tac"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinycomp = "tinycomp.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tinycomp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
