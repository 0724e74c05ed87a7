"""Async HTTP client for the bucket list API."""
import logging
from typing import Any, Optional

import httpx

from app.engine.listing import ListingPage, ListingQuery
from app.models.bucket_item import BucketItem, BucketItemCreate, BucketItemUpdate


logger = logging.getLogger(__name__)


class BucketListClientError(Exception):
    """Non-success response from the bucket list API."""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class BucketListClient:
    """
    Fetches and mutates one user's items over HTTP.

    Usage:
        async with BucketListClient("http://localhost:8000") as client:
            await client.login("me@example.com", "password123")
            items = await client.list_items()
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "BucketListClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self._http.request(method, path, headers=self._headers(), **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail")
            except ValueError:
                detail = response.text
            logger.warning("%s %s failed with %s", method, path, response.status_code)
            raise BucketListClientError(response.status_code, detail)
        return response

    async def login(self, email: str, password: str) -> str:
        """Log in and keep the access token for later requests."""
        response = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.token = response.json()["access_token"]
        return self.token

    async def list_items(self) -> list[BucketItem]:
        response = await self._request("GET", "/bucket-list")
        return [BucketItem.model_validate(item) for item in response.json()]

    async def get_item(self, item_id: int) -> BucketItem:
        response = await self._request("GET", f"/bucket-list/{item_id}")
        return BucketItem.model_validate(response.json())

    async def create_item(self, item: BucketItemCreate) -> BucketItem:
        response = await self._request(
            "POST", "/bucket-list", json=item.model_dump(mode="json")
        )
        return BucketItem.model_validate(response.json())

    async def update_item(self, item_id: int, changes: BucketItemUpdate) -> BucketItem:
        """Send only the fields that were explicitly set on `changes`."""
        response = await self._request(
            "PATCH",
            f"/bucket-list/{item_id}",
            json=changes.model_dump(mode="json", exclude_unset=True),
        )
        return BucketItem.model_validate(response.json())

    async def delete_item(self, item_id: int) -> None:
        await self._request("DELETE", f"/bucket-list/{item_id}")

    async def view(self, query: ListingQuery) -> ListingPage:
        """Fetch one page of the server-side list view."""
        params: list[tuple[str, Any]] = [
            ("view", query.view.value),
            ("status", query.status),
            ("category", query.category),
            ("priority", query.priority),
            ("search", query.search),
            ("page", query.page),
            ("page_size", query.page_size),
        ]
        params.extend(("tags", tag) for tag in query.tags)
        if query.sort is not None:
            params.append(("sort", query.sort.value))

        response = await self._request("GET", "/bucket-list/view", params=params)
        return ListingPage.model_validate(response.json())
