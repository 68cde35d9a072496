# -*- coding: utf-8 -*-
"""Async HTTP client for the menu admin endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
import pydantic

from ..config import settings
from ..errors import NetworkError, UnknownServerError, error_from_response
from ..menu.models import CategoryId, MenuCategory, MenuItem

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _detail(resp: httpx.Response) -> Any:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or None
    if isinstance(body, dict):
        return body.get("detail") or body.get("error")
    return body


def _parse(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise UnknownServerError(f"Unexpected {model.__name__} payload from the server") from exc


def _field(data: Any, name: str) -> Any:
    if not isinstance(data, dict) or not isinstance(data.get(name), list):
        raise UnknownServerError(f"Server response is missing '{name}'")
    return data[name]


class MenuApiClient:
    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=(base_url or settings.api_base_url).rstrip("/"),
            headers=headers,
            timeout=settings.api_timeout if timeout is None else timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "MenuApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            raise NetworkError(str(exc) or "Failed to fetch") from exc
        if resp.status_code >= 400:
            raise error_from_response(resp.status_code, _detail(resp))
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise UnknownServerError(
                f"Server returned a non-JSON response ({resp.status_code})", status=resp.status_code
            ) from exc

    async def fetch_menu(self, *, include_hidden: bool = True) -> List[MenuCategory]:
        data = await self._request("GET", "/api/menu", params={"include_hidden": str(include_hidden).lower()})
        return [_parse(MenuCategory, c) for c in _field(data, "categories")]

    async def update_item(self, item_id: str, patch: Dict[str, Any]) -> MenuItem:
        data = await self._request("PATCH", f"/api/menu/items/{item_id}", json=patch)
        return _parse(MenuItem, data)

    async def delete_item(self, item_id: str) -> None:
        await self._request("DELETE", f"/api/menu/items/{item_id}")

    async def add_item(
        self,
        *,
        category_id: CategoryId,
        name: str,
        calories: int,
        image_path: str,
        hidden: bool = False,
    ) -> MenuItem:
        data = await self._request(
            "POST",
            "/api/menu/items",
            json={
                "category_id": category_id.value,
                "name": name,
                "calories": calories,
                "image_path": image_path,
                "hidden": hidden,
            },
        )
        return _parse(MenuItem, data)

    async def set_order(self, category_id: CategoryId, order: List[str]) -> List[str]:
        data = await self._request("PUT", f"/api/menu/order/{category_id.value}", json={"order": list(order)})
        return [str(item_id) for item_id in _field(data, "order")]
