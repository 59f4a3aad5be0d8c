"""
Name: Backend ASGI Entrypoint (projecthub.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep this module side-effect free beyond importing projecthub.api.main

Notes/Constraints:
  - uvicorn projecthub.main:app
"""

from projecthub.api.main import app

__all__ = ["app"]
