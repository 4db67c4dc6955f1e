# src/ikigai_planner/core/auth.py

"""
Authentication session store.

Same loading/error/result contract as the entity stores, holding a single
`user` slot instead of a collection. Token handling (where it is kept, how it
is sent) belongs to the AuthService implementation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .models import User
from .ports import AuthService
from .result import Err, Ok, Result
from .store import RemoteCallState

logger = logging.getLogger(__name__)


def _user_payload(resp: Any) -> Mapping[str, Any]:
    # Login/register may answer {"token": ..., "user": {...}} or the user itself.
    if isinstance(resp, Mapping):
        inner = resp.get("user")
        if isinstance(inner, Mapping):
            return inner
        return resp
    return {}


class AuthSession(RemoteCallState):
    kind = "auth"
    messages = {
        "register": "Erro ao registrar usuário",
        "login": "Credenciais inválidas",
        "logout": "Erro ao fazer logout",
        "update_profile": "Erro ao atualizar perfil",
        "update_password": "Erro ao atualizar senha",
        "forgot_password": "Erro ao processar recuperação de senha",
        "reset_password": "Erro ao redefinir senha",
    }

    def __init__(self, service: AuthService) -> None:
        super().__init__(service)
        self.user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _set_user(self, resp: Any) -> User:
        self.user = User.from_api(_user_payload(resp))
        return self.user

    async def load_user(self) -> Result[User | None]:
        """
        Restore the user behind a stored token.

        A failure here is not a user-facing error: the stale token is discarded
        and the session simply starts logged out.
        """
        service = self.service
        if not service.is_authenticated():
            return Ok(None)

        self.loading = True
        try:
            resp = await service.get_current_user()
            return Ok(self._set_user(resp))
        except Exception as e:
            logger.warning("Failed to restore session user: %s", e)
            service.set_token(None)
            self.user = None
            return Err("Sessão expirada", e)
        finally:
            self.loading = False

    async def register(self, name: str, email: str, password: str) -> Result[User]:
        service = self.service
        data = {"name": name, "email": email, "password": password}
        return await self._call("register", lambda: service.register(data), self._set_user)

    async def login(self, email: str, password: str) -> Result[User]:
        service = self.service
        data = {"email": email, "password": password}
        return await self._call("login", lambda: service.login(data), self._set_user)

    async def logout(self) -> Result[None]:
        service = self.service

        def _clear(_resp: Any) -> None:
            self.user = None

        return await self._call("logout", lambda: service.logout(), _clear)

    async def update_profile(
        self,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> Result[User]:
        service = self.service
        current = self.user
        data = {
            "name": name or (current.name if current else ""),
            "email": email or (current.email if current else ""),
        }

        def _merge(resp: Any) -> User:
            payload = _user_payload(resp)
            self.user = current.merged(payload) if current else User.from_api(payload)
            return self.user

        return await self._call("update_profile", lambda: service.update_details(data), _merge)

    async def update_password(self, current_password: str, new_password: str) -> Result[None]:
        service = self.service
        data = {"currentPassword": current_password, "newPassword": new_password}
        return await self._call(
            "update_password",
            lambda: service.update_password(data),
            lambda _resp: None,
        )

    async def forgot_password(self, email: str) -> Result[None]:
        service = self.service
        return await self._call(
            "forgot_password",
            lambda: service.forgot_password(email),
            lambda _resp: None,
        )

    async def reset_password(self, token: str, password: str) -> Result[None]:
        service = self.service
        return await self._call(
            "reset_password",
            lambda: service.reset_password(token, password),
            lambda _resp: None,
        )
