[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mstackvm"
version = "0.1.0"
description = "A multi-stack virtual machine with a standard library of stack words"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual machine", "stack machine", "interpreter", "multistack", "workbench"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mstackvm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
