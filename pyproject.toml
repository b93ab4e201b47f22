[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webembed"
version = "11.2.1"
description = "Serve a folder of static web assets with precomputed hashes, ETags, MIME types and gzip/brotli variants."
requires-python = ">=3.10"
keywords = ["http", "embed", "static", "web", "server", "assets", "etag", "brotli", "gzip"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "brotli>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "brotli>=1.0",
]

[project.scripts]
webembed-serve = "webembed.serve:main"

[tool.hatch.build.targets.wheel]
packages = ["webembed"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
