"""
Server-rendered pages.

Every page except login and signup needs a session; requests without one
are redirected to the login form.
"""

from pathlib import Path as FilePath
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Path, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from household_inventory.api.dependencies import (
    get_account_service,
    get_category_service,
    get_item_service,
    get_restock_notifier,
    get_session_account_id,
)
from household_inventory.api.routes.v1.auth import set_session_cookie
from household_inventory.core.config import settings
from household_inventory.core.exceptions import ValidationFailure
from household_inventory.core.security import create_access_token
from household_inventory.core.tracing import create_span
from household_inventory.schemas.accounts import AccountCreate
from household_inventory.schemas.categories import CategoryCreate
from household_inventory.schemas.items import MAX_COUNT, ItemCreate, ItemUpdate
from household_inventory.services.accounts import AccountService
from household_inventory.services.categories import CategoryService
from household_inventory.services.grouping import group_by_category
from household_inventory.services.items import ItemService
from household_inventory.services.notifier import RestockNotifier

TEMPLATES_DIR = FilePath(__file__).parent / "templates"
GROUP_COOKIE_NAME = "group"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


class LoginRequired(Exception):
    """Raised by page handlers when the request has no valid session."""


def get_web_account_id(account_id: Optional[int] = Depends(get_session_account_id)) -> int:
    if account_id is None:
        raise LoginRequired()
    return account_id


def web_url(path: str) -> str:
    return f"{settings.BASE_PATH}{path}"


def redirect_home() -> RedirectResponse:
    return RedirectResponse(web_url("/web"), status_code=status.HTTP_303_SEE_OTHER)


def redirect_to_login() -> RedirectResponse:
    return RedirectResponse(web_url("/web/login"), status_code=status.HTTP_303_SEE_OTHER)


def optional_int(value: Optional[str], label: str) -> Optional[int]:
    """HTML forms send empty strings for unset numeric fields."""
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationFailure(f"{label} must be a whole number") from None


def form_error(exc: Exception) -> str:
    """Message shown above a form that could not be saved."""
    if isinstance(exc, ValidationError):
        return "; ".join(error["msg"] for error in exc.errors())
    if isinstance(exc, IntegrityError):
        return "An item with this name already exists"
    return str(getattr(exc, "detail", exc))


def parse_flag(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in ("false", "0", "no", "off")


def render(request: Request, template: str, context: Dict[str, Any], status_code: int = 200) -> HTMLResponse:
    context.setdefault("base_path", settings.BASE_PATH)
    return templates.TemplateResponse(request, template, context, status_code=status_code)


async def page_context(
    account_id: int, accounts: AccountService, notifier: RestockNotifier, **extra: Any
) -> Dict[str, Any]:
    """Values shared by every signed-in page: the account and its restock notifications."""
    return {
        "account": await accounts.get_account(account_id),
        "notifications": await notifier.notifications_for(account_id),
        **extra,
    }


@router.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return redirect_home()


@router.get("/web", response_class=HTMLResponse, summary="Inventory overview")
async def index(
    request: Request,
    group: Optional[str] = None,
    account_id: int = Depends(get_web_account_id),
    accounts: AccountService = Depends(get_account_service),
    items: ItemService = Depends(get_item_service),
    categories: CategoryService = Depends(get_category_service),
    notifier: RestockNotifier = Depends(get_restock_notifier),
) -> Response:
    """
    List the account's items, grouped by category unless grouping was
    switched off with ``?group=false`` (remembered in a cookie).
    """
    group_by = parse_flag(group if group is not None else request.cookies.get(GROUP_COOKIE_NAME))

    all_items = await items.list_items(account_id)
    all_categories = await categories.list_categories(account_id)
    context = await page_context(
        account_id,
        accounts,
        notifier,
        categories=all_categories,
        group_by_category=group_by,
        item_amount=len(all_items),
    )

    if group_by:
        with create_span("inventory.group_by_category", {"account.id": account_id}):
            context["grouped_items"] = group_by_category(all_items, all_categories)
    else:
        context["items"] = all_items

    response = render(request, "index.html", context)
    if group is not None:
        response.set_cookie(GROUP_COOKIE_NAME, str(group_by).lower(), httponly=True, samesite="lax", path="/")
    return response


@router.get("/web/signup", response_class=HTMLResponse, summary="Signup form")
async def show_signup_form(request: Request) -> Response:
    return render(request, "signup.html", {})


@router.post("/web/signup", summary="Create an account")
async def signup(
    request: Request,
    name: str = Form(..., min_length=1),
    email: str = Form(...),
    password: str = Form(...),
    accounts: AccountService = Depends(get_account_service),
) -> Response:
    try:
        await accounts.create_account(AccountCreate(name=name, email=email, password=password))
    except ValidationError as exc:
        reason = "; ".join(error["msg"] for error in exc.errors())
        return render(request, "signup.html", {"error": reason, "name": name, "email": email}, 400)
    except ValidationFailure as exc:
        return render(request, "signup.html", {"error": exc.detail, "name": name, "email": email}, 400)
    return redirect_to_login()


@router.get("/web/login", response_class=HTMLResponse, summary="Login form")
async def show_login_form(request: Request) -> Response:
    return render(request, "login.html", {})


@router.post("/web/login", summary="Start a session")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    accounts: AccountService = Depends(get_account_service),
) -> Response:
    account = await accounts.authenticate(email, password)
    if not account:
        return render(request, "login.html", {"error": "Invalid email or password", "email": email}, 400)

    response = redirect_home()
    set_session_cookie(response, create_access_token(account.id))
    return response


@router.get("/web/logout", summary="End the session")
async def logout() -> Response:
    response = redirect_to_login()
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response


@router.get("/web/categories/add", response_class=HTMLResponse, summary="New category form")
async def show_add_category_form(
    request: Request,
    account_id: int = Depends(get_web_account_id),
    accounts: AccountService = Depends(get_account_service),
    notifier: RestockNotifier = Depends(get_restock_notifier),
) -> Response:
    return render(request, "add_category.html", await page_context(account_id, accounts, notifier))


@router.post("/web/categories/add", summary="Create a category")
async def add_category(
    name: str = Form(..., min_length=1),
    color: str = Form(settings.DEFAULT_CATEGORY_COLOR),
    account_id: int = Depends(get_web_account_id),
    categories: CategoryService = Depends(get_category_service),
) -> Response:
    await categories.create_category(account_id, CategoryCreate(name=name, color=color))
    return redirect_home()


@router.post("/web/categories/delete/{category_id}", summary="Delete a category")
async def delete_category(
    category_id: int = Path(..., le=MAX_COUNT),
    account_id: int = Depends(get_web_account_id),
    categories: CategoryService = Depends(get_category_service),
) -> Response:
    await categories.delete_category(account_id, category_id)
    return redirect_home()


@router.get("/web/items/add", response_class=HTMLResponse, summary="New item form")
async def show_add_item_form(
    request: Request,
    category_id: Optional[int] = None,
    account_id: int = Depends(get_web_account_id),
    accounts: AccountService = Depends(get_account_service),
    categories: CategoryService = Depends(get_category_service),
    notifier: RestockNotifier = Depends(get_restock_notifier),
) -> Response:
    context = await page_context(
        account_id,
        accounts,
        notifier,
        categories=await categories.list_categories(account_id),
        selected_category=category_id,
    )
    return render(request, "add_item.html", context)


@router.post("/web/items/add", summary="Create an item")
async def add_item(
    request: Request,
    name: str = Form(..., min_length=1),
    quantity: Optional[str] = Form(None),
    restock_threshold: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    account_id: int = Depends(get_web_account_id),
    accounts: AccountService = Depends(get_account_service),
    items: ItemService = Depends(get_item_service),
    categories: CategoryService = Depends(get_category_service),
    notifier: RestockNotifier = Depends(get_restock_notifier),
) -> Response:
    selected_category = None
    try:
        selected_category = optional_int(category_id, "Category")
        item_in = ItemCreate(
            name=name,
            quantity=optional_int(quantity, "Quantity") or 0,
            restock_threshold=optional_int(restock_threshold, "Restock threshold"),
            category_id=selected_category,
        )
        await items.create_item(account_id, item_in)
    except (ValidationError, ValidationFailure, IntegrityError) as exc:
        context = await page_context(
            account_id,
            accounts,
            notifier,
            categories=await categories.list_categories(account_id),
            selected_category=selected_category,
            error=form_error(exc),
        )
        return render(request, "add_item.html", context, status.HTTP_400_BAD_REQUEST)
    return redirect_home()


@router.get("/web/items/edit/{item_id}", response_class=HTMLResponse, summary="Edit item form")
async def show_edit_item_form(
    request: Request,
    item_id: int = Path(..., le=MAX_COUNT),
    account_id: int = Depends(get_web_account_id),
    accounts: AccountService = Depends(get_account_service),
    items: ItemService = Depends(get_item_service),
    categories: CategoryService = Depends(get_category_service),
    notifier: RestockNotifier = Depends(get_restock_notifier),
) -> Response:
    item = await items.get_item(account_id, item_id)
    if not item:
        return render(request, "not_found.html", {"what": "Item"}, status.HTTP_404_NOT_FOUND)

    context = await page_context(
        account_id,
        accounts,
        notifier,
        item=item,
        categories=await categories.list_categories(account_id),
        selected_category=item.category_id,
    )
    return render(request, "edit_item.html", context)
@router.post("/web/items/edit/{item_id}", summary="Update an item")
async def edit_item(
    request: Request,
    item_id: int = Path(..., le=MAX_COUNT),
    name: str = Form(..., min_length=1),
    quantity: Optional[str] = Form(None),
    restock_threshold: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    account_id: int = Depends(get_web_account_id),
    accounts: AccountService = Depends(get_account_service),
    items: ItemService = Depends(get_item_service),
    categories: CategoryService = Depends(get_category_service),
    notifier: RestockNotifier = Depends(get_restock_notifier),
) -> Response:
    selected_category = None
    try:
        # the form always submits the category select, so an empty value clears it
        selected_category = optional_int(category_id, "Category")
        item_in = ItemUpdate(
            name=name,
            quantity=optional_int(quantity, "Quantity"),
            restock_threshold=optional_int(restock_threshold, "Restock threshold"),
            category_id=selected_category,
        )
        item = await items.update_item(account_id, item_id, item_in)
    except (ValidationError, ValidationFailure, IntegrityError) as exc:
        current = await items.get_item(account_id, item_id)
        if not current:
            return render(request, "not_found.html", {"what": "Item"}, status.HTTP_404_NOT_FOUND)
        context = await page_context(
            account_id,
            accounts,
            notifier,
            item=current,
            categories=await categories.list_categories(account_id),
            selected_category=selected_category,
            error=form_error(exc),
        )
        return render(request, "edit_item.html", context, status.HTTP_400_BAD_REQUEST)

    if not item:
        return render(request, "not_found.html", {"what": "Item"}, status.HTTP_404_NOT_FOUND)
    return redirect_home()


@router.post("/web/items/delete/{item_id}", summary="Delete an item")
async def delete_item(
    request: Request,
    item_id: int = Path(..., le=MAX_COUNT),
    account_id: int = Depends(get_web_account_id),
    items: ItemService = Depends(get_item_service),
) -> Response:
    if await items.delete_item(account_id, item_id) == 0:
        return render(request, "not_found.html", {"what": "Item"}, status.HTTP_404_NOT_FOUND)
    return redirect_home()


@router.post("/web/items/use/{item_id}", summary="Use one unit")
async def use_item(
    request: Request,
    item_id: int = Path(..., le=MAX_COUNT),
    account_id: int = Depends(get_web_account_id),
    items: ItemService = Depends(get_item_service),
) -> Response:
    if not await items.use_item(account_id, item_id):
        return render(request, "not_found.html", {"what": "Item"}, status.HTTP_404_NOT_FOUND)
    return redirect_home()


@router.post("/web/items/purchase/{item_id}", summary="Record a purchase")
async def purchase_item(
    request: Request,
    item_id: int = Path(..., le=MAX_COUNT),
    quantity: Optional[str] = Form(None),
    account_id: int = Depends(get_web_account_id),
    items: ItemService = Depends(get_item_service),
) -> Response:
    try:
        item = await items.purchase_item(account_id, item_id, optional_int(quantity, "Quantity") or 0)
    except ValidationFailure as exc:
        return render(request, "error.html", {"error": exc.detail}, status.HTTP_400_BAD_REQUEST)

    if not item:
        return render(request, "not_found.html", {"what": "Item"}, status.HTTP_404_NOT_FOUND)
    return redirect_home()
