"""
Client application shell.

Any GET that no API route matched is answered from the static directory:
the file itself when it exists, otherwise index.html so the frontend router
can take over. Unknown /api paths stay 404.
"""
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.config import settings
from app.core.errors import NotFoundError

router = APIRouter(include_in_schema=False)


def _static_root() -> Path:
    return Path(settings.static_dir).resolve()


@router.get("/{full_path:path}")
async def client_shell(full_path: str):
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundError()

    root = _static_root()
    if full_path:
        candidate = (root / full_path).resolve()
        # Never serve anything outside the static directory
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)

    index = root / "index.html"
    if not index.is_file():
        raise NotFoundError()
    return FileResponse(index)
