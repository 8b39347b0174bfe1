"""Roblox client using aiohttp (cookie session + groups API)."""

import sys
from typing import Dict, Optional

import aiohttp

from relay.ports.outbound import Identity

USERS_API_BASE = "https://users.roblox.com/v1"
GROUPS_API_BASE = "https://groups.roblox.com/v1"
COOKIE_NAME = ".ROBLOSECURITY"
CSRF_HEADER = "x-csrf-token"


def _log(msg: str):
    print(msg, file=sys.stderr)


class RobloxError(Exception):
    """Base error for Roblox API failures."""


class RobloxAuthError(RobloxError):
    """Cookie missing, expired or rejected."""


class RobloxAPIError(RobloxError):
    """A Roblox endpoint rejected the request."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class RobloxClient:
    """Async Roblox API client authenticated by a .ROBLOSECURITY cookie.

    Write endpoints need an X-CSRF-TOKEN: the first write answers 403 with a
    fresh token in its headers, and is sent once more carrying it.
    """

    def __init__(self):
        self._cookie: str = ""
        self._csrf_token: str = ""
        self.identity: Optional[Identity] = None

    @property
    def is_configured(self) -> bool:
        return bool(self._cookie)

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Cookie": f"{COOKIE_NAME}={self._cookie}",
            "Accept": "application/json",
        }
        if self._csrf_token:
            headers["X-CSRF-TOKEN"] = self._csrf_token
        return headers

    async def authenticate(self, cookie: str) -> Identity:
        """Install the session cookie and confirm it by fetching the user."""
        if not cookie:
            raise RobloxAuthError("No cookie supplied")
        self._cookie = cookie
        self._csrf_token = ""
        return await self.get_current_identity()

    async def get_current_identity(self) -> Identity:
        if not self._cookie:
            raise RobloxAuthError("Not authenticated: call authenticate() first")
        async with aiohttp.ClientSession() as session:
            async with session.get(
                f"{USERS_API_BASE}/users/authenticated", headers=self._headers()
            ) as resp:
                if resp.status == 401:
                    raise RobloxAuthError("Cookie rejected (HTTP 401)")
                if resp.status >= 400:
                    body = await resp.text()
                    raise RobloxAPIError(f"User lookup failed (HTTP {resp.status}): {body}", resp.status)
                data = await resp.json()
        if "id" not in data:
            raise RobloxAuthError(f"Unexpected user payload: {data}")
        self.identity = Identity(
            user_id=int(data["id"]),
            name=data.get("name", ""),
            display_name=data.get("displayName", ""),
        )
        return self.identity

    async def _get_role_id(self, session: aiohttp.ClientSession, group_id: int, rank: int) -> int:
        """Find the id of the group role whose rank number equals *rank*."""
        async with session.get(
            f"{GROUPS_API_BASE}/groups/{group_id}/roles", headers=self._headers()
        ) as resp:
            if resp.status >= 400:
                body = await resp.text()
                raise RobloxAPIError(f"Role lookup failed (HTTP {resp.status}): {body}", resp.status)
            data = await resp.json()
        for role in data.get("roles", []):
            if role.get("rank") == rank:
                return int(role["id"])
        raise RobloxAPIError(f"Group {group_id} has no role with rank {rank}")

    async def _patch_membership(
        self, session: aiohttp.ClientSession, group_id: int, user_id: int, role_id: int
    ) -> None:
        url = f"{GROUPS_API_BASE}/groups/{group_id}/users/{user_id}"
        payload = {"roleId": role_id}
        for _ in range(2):
            async with session.patch(url, headers=self._headers(), json=payload) as resp:
                token = resp.headers.get(CSRF_HEADER)
                if resp.status == 403 and token and token != self._csrf_token:
                    self._csrf_token = token
                    continue
                if resp.status >= 400:
                    body = await resp.text()
                    raise RobloxAPIError(f"Rank change failed (HTTP {resp.status}): {body}", resp.status)
                return
        raise RobloxAPIError("Rank change failed: CSRF token rejected", 403)

    async def set_rank(
        self,
        group_id: Optional[int],
        user_id: Optional[int],
        rank_id: Optional[int],
    ) -> None:
        """Move *user_id* to the role ranked *rank_id* in *group_id*."""
        for name, value in (("group_id", group_id), ("user_id", user_id), ("rank_id", rank_id)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise RobloxAPIError(f"{name} is not a number: {value!r}")
        if not self._cookie:
            raise RobloxAuthError("Not authenticated: call authenticate() first")

        async with aiohttp.ClientSession() as session:
            role_id = await self._get_role_id(session, group_id, rank_id)
            await self._patch_membership(session, group_id, user_id, role_id)
        _log(f"[roblox] group {group_id}: user {user_id} set to rank {rank_id} (role {role_id})")
