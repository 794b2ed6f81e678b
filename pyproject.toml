[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "curvefft"
version = "0.1.0"
description = "Prime-field and elliptic-curve FFTs and multi-exponentiation on the CPU"
requires-python = ">=3.10"
dependencies = []
keywords = ["fft", "finite-field", "elliptic-curve", "multiexp", "msm", "bls12-381"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["curvefft"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
