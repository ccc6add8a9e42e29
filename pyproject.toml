[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "subpar"
version = "0.1.0"
description = "Subway arrivals and elevator status, served as a small JSON web service"
requires-python = ">=3.10"
dependencies = []
keywords = ["subway", "transit", "gtfs-realtime", "elevators", "accessibility", "wsgi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
subpar = "subpar.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["subpar"]

[tool.pytest.ini_options]
addopts = "-ra"
