"""
CORS for the dashboard frontend.

Starlette's CORSMiddleware answers preflight requests itself and rejects
origins outside the allow-list. Paths under `exclude_prefixes` (the public
embed API, which sets `Access-Control-Allow-Origin: *` itself) bypass it.
"""
from typing import Iterable

from starlette.middleware.cors import CORSMiddleware
from starlette.types import Receive, Scope, Send


class DashboardCORSMiddleware(CORSMiddleware):
    def __init__(self, app, exclude_prefixes: Iterable[str] = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exclude_prefixes = tuple(exclude_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self.exclude_prefixes and scope["path"].startswith(self.exclude_prefixes):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
