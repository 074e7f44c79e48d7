[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "concurrentengine"
version = "0.1.0"
description = "Thread pool with pluggable FIFO, priority and dependency-graph schedulers"
requires-python = ">=3.10"
dependencies = []
keywords = ["thread pool", "scheduler", "concurrency", "dag", "priority queue", "futures"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
concurrentengine-demo = "concurrentengine.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["concurrentengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
