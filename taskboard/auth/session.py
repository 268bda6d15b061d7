import logging
from typing import Awaitable, Callable

from taskboard.auth.schemas import User

logger = logging.getLogger(__name__)

SessionListener = Callable[["AuthSession"], Awaitable[None]]


class AuthSession:
    """Holds the signed-in user and bearer token supplied by the auth provider.

    Listeners are awaited in subscription order whenever the (user, token)
    pair changes. Setting the same pair again notifies nobody.
    """

    def __init__(self, user: User | None = None, token: str | None = None):
        self._user = user
        self._token = token
        self._listeners: list[SessionListener] = []

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and bool(self._token)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, user: User, token: str) -> None:
        await self._set(user, token)

    async def sign_out(self) -> None:
        await self._set(None, None)

    async def set_token(self, token: str | None) -> None:
        await self._set(self._user, token)

    async def _set(self, user: User | None, token: str | None) -> None:
        if user == self._user and token == self._token:
            return

        self._user = user
        self._token = token
        logger.info(
            f"Session changed: user={user.id if user else None} "
            f"authenticated={self.is_authenticated}"
        )

        for listener in list(self._listeners):
            await listener(self)
