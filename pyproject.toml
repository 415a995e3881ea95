[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lspkit"
version = "0.1.0"
description = "Building blocks for Language Server Protocol servers: JSON-RPC messages, dispatch, Content-Length framing, protocol types and a small example server."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "lsp",
    "language-server-protocol",
    "json-rpc",
    "language-server",
    "editor",
]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Text Editors :: Integrated Development Environments (IDE)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lspkit-server = "lspkit.server:main"

[tool.hatch.build.targets.wheel]
packages = ["lspkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
