"""
Use case: Revoke the bearer token of the current request.

Side effects: Deletes one session row. Unknown tokens are ignored.
"""

from eventspotter.domain.accounts.ports import IdentityProvider


class LogoutUserUseCase:
    def __init__(self, identity: IdentityProvider) -> None:
        self._identity = identity

    async def execute(self, token: str) -> None:
        await self._identity.revoke(token)
