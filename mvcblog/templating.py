"""
MVC Blog - View Layer Helpers
=============================

What:  The Jinja2 template environment and view-level logic that does not
       belong in a template.
How:   Starlette's Jinja2Templates loads templates from mvcblog/templates;
       `render()` adds the request and the status code.

Category Selection:
    The post forms render a <select> of categories. `category_options()`
    decides which option is marked selected by comparing ids, so the
    templates only loop and print. A selected id that matches no category
    (a dangling reference, or the create form's None) selects nothing.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from mvcblog.config import settings
from mvcblog.schemas.category import CategoryOption, CategoryResponse

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["site_name"] = settings.site_name


def category_options(
    categories: Iterable[CategoryResponse],
    selected_id: Optional[int],
) -> List[CategoryOption]:
    """
    One option per category, in input order.

    Exactly one option is selected when selected_id matches a category,
    none otherwise.
    """
    return [
        CategoryOption(
            id=category.id,
            name=category.name,
            selected=selected_id is not None and category.id == selected_id,
        )
        for category in categories
    ]


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """Render a template into an HTMLResponse."""
    return templates.TemplateResponse(
        request,
        name,
        context or {},
        status_code=status_code,
    )
