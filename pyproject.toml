[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "tensorlite"
version = "0.1.0"
description = "A small n-dimensional tensor library with typed storage and basic neural-network operators."
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["tensor", "neural network", "array", "transpose", "resize"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["tensorlite*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
