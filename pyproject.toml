[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ringproofs"
version = "0.1.0"
description = "CLSAG ring signatures and Bulletproofs range-proof building blocks over Ed25519, as used by the Monero protocol"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = [
    "ed25519",
    "bulletproofs",
    "range-proof",
    "ring-signature",
    "clsag",
    "monero",
    "cryptography",
]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ringproofs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
