"""Snippet execution service package.

This package runs JavaScript and TypeScript snippets submitted over HTTP in
a throwaway workspace and returns the captured output.  It is designed to
run as a single container whose own isolation (Docker, VM) is the security
boundary; inside it, every request gets a private directory and a
time‑bounded child process.

The top‑level modules include:

* ``config`` – configuration handling for environment variables.
* ``pipelines`` – the registry of supported languages.
* ``staging`` – copying template projects and writing entry files.
* ``workspace`` – per‑execution scratch directories.
* ``executor`` – process supervision and the execution orchestrator.
* ``models`` – Pydantic models defining request and response schemas.
* ``api`` – FastAPI application exposing HTTP endpoints.
"""

__version__ = "0.1.0"
