from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

PACKAGE_DIR = Path(__file__).resolve().parent.parent

router = APIRouter()
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def portal(request: Request):
    settings = request.app.state.settings
    return templates.TemplateResponse(
        request,
        "index.html",
        {"app_name": settings.APP_NAME, "api_base": settings.API_BASE_URL},
    )
