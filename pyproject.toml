[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pinexgw"
version = "1.6.23"
description = "Message routing for gateways: prefix tables, multi-field rule matching, target selection and expiry tracking"
requires-python = ">=3.10"
dependencies = []
keywords = ["gateway", "routing", "prefix", "trie", "bitset", "rule-matching", "smpp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Communications :: Telephony",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["pinexgw"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
