"""
MVC Blog - Post Resource Handler (HTML)
=======================================

What:  The controller: maps verb + path to a PostService call and a template.
How:   Builds PostInput from form fields, delegates to services, then either
       renders a template or redirects (Post/Redirect/Get after writes).
Who:   Browsers. The JSON equivalent lives in routes/api.py.

Route Table:
    GET        /posts              list       → posts/index.html
    GET        /posts/new          new-form   → posts/create.html
    POST       /posts              create     → 303 /posts/{id}
    GET        /posts/{id}         show       → posts/show.html
    GET        /posts/{id}/edit    edit-form  → posts/edit.html
    PUT|PATCH  /posts/{id}         update     → 303 /posts/{id}
    DELETE     /posts/{id}         delete     → 303 /posts
    POST       /posts/{id}         `_method` override (PUT, PATCH, DELETE)

Method Override:
    HTML forms can only send GET and POST. The edit and delete forms post a
    hidden `_method` field and submit_post_form() dispatches on it.

Error responses (handled by global exception handlers, rendered as HTML):
    400: Blank field, non-numeric or unknown category, bad `_method`
    404: Post does not exist
    500: Database failure
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from mvcblog.database import get_db_session
from mvcblog.exceptions import ValidationError
from mvcblog.schemas.post import PostInput
from mvcblog.services.category_service import category_service
from mvcblog.services.post_service import post_service
from mvcblog.templating import category_options, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])

OVERRIDE_METHODS = {"PUT", "PATCH", "DELETE"}


def post_input_from_form(title: str, content: str, category_id: str) -> PostInput:
    """
    Convert raw form fields into the validated input structure.

    Form values always arrive as strings; a category_id that is not an
    integer is rejected here, before the service sees it.
    """
    try:
        parsed_category_id = int(category_id)
    except (TypeError, ValueError):
        raise ValidationError(
            message="Please choose a category",
            field="category_id",
            context={"category_id": category_id},
        )

    try:
        return PostInput(title=title, content=content, category_id=parsed_category_id)
    except SchemaValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else None
        raise ValidationError(message=first["msg"], field=field) from e


def _redirect(url) -> RedirectResponse:
    # 303 makes the browser follow with GET whatever the original verb was
    return RedirectResponse(url=str(url), status_code=303)


@router.get("/posts", response_class=HTMLResponse, name="list_posts")
async def list_posts(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
):
    """Render every post."""
    result = await post_service.list_posts(db)
    return render(request, "posts/index.html", {"posts": result.posts})


@router.get("/posts/new", response_class=HTMLResponse, name="new_post_form")
async def new_post_form(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
):
    """Render the creation form with every category and none selected."""
    categories = await category_service.list_categories(db)
    return render(
        request,
        "posts/create.html",
        {"options": category_options(categories, None)},
    )


@router.post("/posts", name="create_post")
async def create_post(
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    category_id: str = Form(""),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """Store a new post, then redirect to its page."""
    data = post_input_from_form(title, content, category_id)
    post = await post_service.create_post(db, data)
    return _redirect(request.url_for("show_post", post_id=post.id))


@router.get("/posts/{post_id}", response_class=HTMLResponse, name="show_post")
async def show_post(
    request: Request,
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    """Render one post; 404 page when it does not exist."""
    post = await post_service.get_post(db, post_id)
    return render(request, "posts/show.html", {"post": post})


@router.get("/posts/{post_id}/edit", response_class=HTMLResponse, name="edit_post_form")
async def edit_post_form(
    request: Request,
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    """Render the edit form prefilled, with the post's category selected."""
    post = await post_service.get_post(db, post_id)
    categories = await category_service.list_categories(db)
    return render(
        request,
        "posts/edit.html",
        {"post": post, "options": category_options(categories, post.category_id)},
    )


@router.api_route("/posts/{post_id}", methods=["PUT", "PATCH"], name="update_post")
async def update_post(
    request: Request,
    post_id: int,
    title: str = Form(""),
    content: str = Form(""),
    category_id: str = Form(""),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """Overwrite all three fields, then redirect to the post."""
    data = post_input_from_form(title, content, category_id)
    await post_service.update_post(db, post_id, data)
    return _redirect(request.url_for("show_post", post_id=post_id))


@router.delete("/posts/{post_id}", name="delete_post")
async def delete_post(
    request: Request,
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """Remove the post, then redirect to the list."""
    await post_service.delete_post(db, post_id)
    return _redirect(request.url_for("list_posts"))


@router.post("/posts/{post_id}", name="submit_post_form")
async def submit_post_form(
    request: Request,
    post_id: int,
    method: str = Form("", alias="_method"),
    title: str = Form(""),
    content: str = Form(""),
    category_id: str = Form(""),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """Dispatch a form POST carrying `_method` to update or delete."""
    override = method.upper()
    if override not in OVERRIDE_METHODS:
        raise ValidationError(
            message=f"Unsupported form method '{method}'",
            field="_method",
            context={"allowed": sorted(OVERRIDE_METHODS)},
        )

    logger.debug("Form override %s for post %s", override, post_id)
    if override == "DELETE":
        await post_service.delete_post(db, post_id)
        return _redirect(request.url_for("list_posts"))

    data = post_input_from_form(title, content, category_id)
    await post_service.update_post(db, post_id, data)
    return _redirect(request.url_for("show_post", post_id=post_id))
