"""
Tests for the server-rendered pages.
"""

from typing import Callable, Dict

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

Cookie = Callable[[int], Dict[str, str]]


async def test_root_redirects_to_inventory(client: AsyncClient) -> None:
    response = await client.get("/")

    assert response.status_code == 303
    assert response.headers["location"] == "/web"


@pytest.mark.parametrize(
    "method, url",
    [
        ("GET", "/web"),
        ("GET", "/web/items/add"),
        ("GET", "/web/categories/add"),
        ("POST", "/web/items/use/1"),
    ],
)
async def test_pages_redirect_to_login_without_session(client: AsyncClient, method: str, url: str) -> None:
    response = await client.request(method, url)

    assert response.status_code == 303
    assert response.headers["location"] == "/web/login"


async def test_signup_and_login_flow(client: AsyncClient) -> None:
    signup = await client.post(
        "/web/signup", data={"name": "Dana", "email": "dana@example.com", "password": "long-enough"}
    )
    assert signup.status_code == 303
    assert signup.headers["location"] == "/web/login"

    login = await client.post("/web/login", data={"email": "dana@example.com", "password": "long-enough"})
    assert login.status_code == 303
    assert login.headers["location"] == "/web"
    assert "session=" in login.headers["set-cookie"]


async def test_signup_form_shows_errors(client: AsyncClient) -> None:
    response = await client.post("/web/signup", data={"name": "Dana", "email": "dana@example.com", "password": "short"})

    assert response.status_code == 400
    assert 'class="error"' in response.text


async def test_login_with_bad_credentials(client: AsyncClient) -> None:
    response = await client.post("/web/login", data={"email": "ghost@example.com", "password": "whatever1"})

    assert response.status_code == 400
    assert "Invalid email or password" in response.text


async def test_logout_clears_session(client: AsyncClient) -> None:
    response = await client.get("/web/logout")

    assert response.status_code == 303
    assert response.headers["location"] == "/web/login"
    assert 'session=""' in response.headers["set-cookie"]


async def test_index_groups_by_category(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    cookie = session_cookie(account_id)
    await client.post("/web/categories/add", data={"name": "Pantry", "color": "#FFFFFF"}, headers=cookie)
    await client.post("/web/categories/add", data={"name": "Garage", "color": "#000000"}, headers=cookie)
    await client.post("/web/items/add", data={"name": "Rice", "quantity": "3", "category_id": "1"}, headers=cookie)
    await client.post("/web/items/add", data={"name": "Batteries", "quantity": "5", "category_id": ""}, headers=cookie)

    response = await client.get("/web", headers=cookie)

    assert response.status_code == 200
    page = response.text
    assert "Alice" in page
    assert "2 item(s)" in page
    assert page.index("Garage") < page.index("Pantry") < page.index("Uncategorized")
    assert "color: #000000;" in page
    assert "Add the first item to this category" in page


async def test_index_flat_list_remembers_choice(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    cookie = session_cookie(account_id)
    await client.post("/web/items/add", data={"name": "Rice", "quantity": "3"}, headers=cookie)

    response = await client.get("/web", params={"group": "false"}, headers=cookie)

    assert response.status_code == 200
    assert "Group by category" in response.text
    assert "Uncategorized" not in response.text
    assert "group=false" in response.headers["set-cookie"]

    remembered = await client.get("/web", headers={"Cookie": f"{cookie['Cookie']}; group=false"})
    assert "Group by category" in remembered.text


async def test_index_shows_restock_notifications(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    cookie = session_cookie(account_id)
    await client.post(
        "/web/items/add", data={"name": "Milk", "quantity": "0", "restock_threshold": "2"}, headers=cookie
    )

    response = await client.get("/web", headers=cookie)

    assert "Restock needed" in response.text
    assert "Current: 0, Threshold: 2." in response.text


async def test_add_item_rejects_negative_quantity(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    response = await client.post(
        "/web/items/add", data={"name": "Rice", "quantity": "-3"}, headers=session_cookie(account_id)
    )

    assert response.status_code == 400
    assert "Quantity cannot be negative" in response.text


async def test_item_actions(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    cookie = session_cookie(account_id)
    created = await client.post("/web/items/add", data={"name": "Eggs", "quantity": "1"}, headers=cookie)
    assert created.status_code == 303

    used = await client.post("/web/items/use/1", headers=cookie)
    assert used.status_code == 303

    purchased = await client.post("/web/items/purchase/1", data={"quantity": "6"}, headers=cookie)
    assert purchased.status_code == 303

    edit_form = await client.get("/web/items/edit/1", headers=cookie)
    assert edit_form.status_code == 200
    assert 'value="6"' in edit_form.text

    edited = await client.post(
        "/web/items/edit/1",
        data={"name": "Free-range eggs", "quantity": "4", "restock_threshold": "2", "category_id": ""},
        headers=cookie,
    )
    assert edited.status_code == 303

    page = await client.get("/web", headers=cookie)
    assert "Free-range eggs" in page.text

    deleted = await client.post("/web/items/delete/1", headers=cookie)
    assert deleted.status_code == 303

    missing = await client.post("/web/items/delete/1", headers=cookie)
    assert missing.status_code == 404


async def test_other_accounts_items_are_hidden(
    client: AsyncClient, account_id: int, other_account_id: int, session_cookie: Cookie
) -> None:
    await client.post("/web/items/add", data={"name": "Secret", "quantity": "1"}, headers=session_cookie(other_account_id))

    cookie = session_cookie(account_id)
    assert (await client.get("/web/items/edit/1", headers=cookie)).status_code == 404
    assert (await client.post("/web/items/use/1", headers=cookie)).status_code == 404
    assert "Secret" not in (await client.get("/web", headers=cookie)).text


async def test_delete_category_page_action(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    cookie = session_cookie(account_id)
    await client.post("/web/categories/add", data={"name": "Pantry"}, headers=cookie)
    await client.post("/web/items/add", data={"name": "Rice", "quantity": "1", "category_id": "1"}, headers=cookie)

    response = await client.post("/web/categories/delete/1", headers=cookie)
    assert response.status_code == 303

    page = (await client.get("/web", headers=cookie)).text
    assert "Pantry" not in page
    assert "Uncategorized" in page
    assert "Rice" in page


async def test_add_item_with_duplicate_name_shows_form_error(
    client: AsyncClient, account_id: int, session_cookie: Cookie
) -> None:
    cookie = session_cookie(account_id)
    await client.post("/web/items/add", data={"name": "Rice", "quantity": "1"}, headers=cookie)

    response = await client.post("/web/items/add", data={"name": "Rice", "quantity": "2"}, headers=cookie)

    assert response.status_code == 400
    assert "An item with this name already exists" in response.text


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("quantity", "lots", "Quantity must be a whole number"),
        ("restock_threshold", "abc", "Restock threshold must be a whole number"),
        ("category_id", "pantry", "Category must be a whole number"),
        ("quantity", str(2**63), "less than or equal to 2147483647"),
    ],
)
async def test_add_item_rejects_bad_numbers(
    client: AsyncClient, account_id: int, session_cookie: Cookie, field: str, value: str, message: str
) -> None:
    cookie = session_cookie(account_id)

    response = await client.post("/web/items/add", data={"name": "Rice", field: value}, headers=cookie)

    assert response.status_code == 400
    assert message in response.text
    assert "Rice" not in (await client.get("/web", headers=cookie)).text


async def test_edit_item_errors_keep_the_form(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    cookie = session_cookie(account_id)
    await client.post("/web/items/add", data={"name": "Rice", "quantity": "1"}, headers=cookie)
    await client.post("/web/items/add", data={"name": "Flour", "quantity": "2"}, headers=cookie)

    renamed = await client.post("/web/items/edit/2", data={"name": "Rice", "quantity": "2"}, headers=cookie)
    assert renamed.status_code == 400
    assert "An item with this name already exists" in renamed.text

    garbled = await client.post("/web/items/edit/2", data={"name": "Flour", "restock_threshold": "x"}, headers=cookie)
    assert garbled.status_code == 400
    assert "Restock threshold must be a whole number" in garbled.text

    missing = await client.post("/web/items/edit/99", data={"name": "Ghost", "quantity": "y"}, headers=cookie)
    assert missing.status_code == 404


@pytest.mark.parametrize("amount, message", [("abc", "Quantity must be a whole number"), ("2147483647", "cannot exceed")])
async def test_purchase_rejects_bad_amounts(
    client: AsyncClient, account_id: int, session_cookie: Cookie, amount: str, message: str
) -> None:
    cookie = session_cookie(account_id)
    await client.post("/web/items/add", data={"name": "Eggs", "quantity": "6"}, headers=cookie)

    response = await client.post("/web/items/purchase/1", data={"quantity": amount}, headers=cookie)

    assert response.status_code == 400
    assert message in response.text
    assert 'value="6"' in (await client.get("/web/items/edit/1", headers=cookie)).text


async def test_out_of_range_item_id_is_rejected(client: AsyncClient, account_id: int, session_cookie: Cookie) -> None:
    response = await client.post(f"/web/items/use/{2**63}", headers=session_cookie(account_id))

    assert response.status_code == 400
