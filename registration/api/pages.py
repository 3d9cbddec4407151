"""Registration form page."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def registration_form():
    """Serve the registration form."""
    return HTMLResponse((STATIC_DIR / "index.html").read_text(encoding="utf-8"))
