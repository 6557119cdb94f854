[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deepcopygen"
version = "0.1.0"
description = "Generate DeepCopy, DeepCopyInto and DeepCopy<Interface> functions for Go types described by a type model, driven by comment tags."
requires-python = ">=3.10"
dependencies = []
keywords = ["code generation", "deepcopy", "go", "generator", "comment tags"]
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
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["deepcopygen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
