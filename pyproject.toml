[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qqgroupbot"
version = "0.1.0"
description = "A QQ group chat bot with admin commands, dirty-word filtering and random chatter, plus mirai-api-http message and event models"
requires-python = ">=3.10"
dependencies = []
keywords = ["qq", "chat", "bot", "mirai", "group"]
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
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["qqgroupbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
