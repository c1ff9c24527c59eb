[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "pandemic"
version = "1.0.0"
description = "A turn-based strategy game engine in which four AI players fight over cities and paths while a virus spreads"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "strategy", "simulation", "ai", "turn-based"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pandemic = "pandemic.cli:main"

[tool.setuptools.packages.find]
include = ["pandemic*"]

[tool.pytest.ini_options]
addopts = "-ra"
