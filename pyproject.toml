[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quaylink"
version = "0.1.0"
description = "Request descriptions and stream decoders for the Docker Engine API: networks, volumes, secrets, services and system endpoints."
requires-python = ">=3.10"
dependencies = []
keywords = ["docker", "engine-api", "containers", "swarm", "ndjson"]
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

[tool.hatch.build.targets.wheel]
packages = ["quaylink"]

[tool.pytest.ini_options]
addopts = "-ra"
