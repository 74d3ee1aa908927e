"""Facebook Identity Provider — validates a Facebook login token and fetches the identity.

Invariants:
    - Two Graph API calls, in order: debug_token (is the token valid for our app?),
      then /me?fields=id,name,email
    - Any non-200, unparsable body, is_valid false, or missing id raises
      ExternalAuthInvalidError; transport failures too (no retry)
    - The user's token is never logged

Design Decisions:
    - One shared httpx.AsyncClient, owned by this object and closed on shutdown
    - App access token is "{app_id}|{app_secret}" (Graph API convention)
"""

import logging

import httpx

from app.core.domain_types import FacebookUserId
from app.core.errors import ExternalAuthInvalidError
from app.core.repository_protocols import ExternalIdentity

logger = logging.getLogger(__name__)


class FacebookIdentityProvider:
    """IdentityProvider backed by the Facebook Graph API."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        graph_url: str = "https://graph.facebook.com/v2.5",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._app_access_token = f"{app_id}|{app_secret}"
        self._client = httpx.AsyncClient(
            base_url=graph_url, timeout=timeout_seconds, transport=transport,
        )

    async def fetch_identity(self, external_token: str) -> ExternalIdentity:
        if not await self._is_token_valid(external_token):
            raise ExternalAuthInvalidError()
        body = await self._get_json(
            "/me",
            {"fields": "id,name,email", "access_token": external_token},
        )
        if not body or not body.get("id"):
            logger.warning("Facebook /me returned no identity")
            raise ExternalAuthInvalidError("Login provider returned no identity")
        return ExternalIdentity(
            id=FacebookUserId(str(body["id"])), name=body.get("name"), email=body.get("email"),
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _is_token_valid(self, external_token: str) -> bool:
        body = await self._get_json(
            "/debug_token",
            {"access_token": self._app_access_token, "input_token": external_token},
        )
        data = (body or {}).get("data") or {}
        return bool(data.get("is_valid"))

    async def _get_json(self, path: str, params: dict) -> dict | None:
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                f"Facebook {path} rejected token: status {exc.response.status_code}",
            )
            raise ExternalAuthInvalidError()
        except httpx.RequestError as exc:
            logger.error(f"Facebook {path} unreachable: {exc}")
            raise ExternalAuthInvalidError("Login provider unreachable")
        except ValueError:
            logger.error(f"Facebook {path} returned a non-JSON body")
            raise ExternalAuthInvalidError("Login provider returned an invalid response")
