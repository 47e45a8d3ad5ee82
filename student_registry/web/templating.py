from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from student_registry.core.security import get_csrf_token
from student_registry.version import APP_VERSION
from student_registry.web.flash import pop_flash

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Globals shared by every template
templates.env.globals.update({"app_version": APP_VERSION})


def render(request: Request, name: str, context: dict, status_code: int = 200):
    """Render a page with csrf_token and the pending flash message in the context."""
    context.setdefault("csrf_token", get_csrf_token(request))
    context.setdefault("flash", pop_flash(request))
    return templates.TemplateResponse(request, name, context, status_code=status_code)
