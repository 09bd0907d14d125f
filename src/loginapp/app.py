# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pymongo.collection import Collection
from starlette.concurrency import run_in_threadpool

from loginapp.auth.passwords import PasswordHasher
from loginapp.auth.service import AuthService, LoginSucceeded, SignupSucceeded
from loginapp.config import Settings
from loginapp.errors import LoginAppError
from loginapp.infra.account_repo import AccountRepository, connect

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, template_name: str, ctx: Optional[dict] = None):
    return templates.TemplateResponse(request, template_name, ctx or {})


def _is_json(request: Request) -> bool:
    return request.headers.get("content-type", "").split(";")[0].strip().lower() == "application/json"


async def _read_fields(request: Request) -> Dict[str, Optional[str]]:
    """Read a flat string mapping from a form or JSON body."""
    if _is_json(request):
        try:
            data = await request.json()
        except ValueError:
            logger.info("Rejected malformed JSON body on %s", request.url.path)
            data = {}
        if not isinstance(data, dict):
            data = {}
    else:
        data = dict(await request.form())
    return {k: (v if isinstance(v, str) else None) for k, v in data.items()}


def _auth(request: Request) -> AuthService:
    return request.app.state.auth_service


def create_app(settings: Optional[Settings] = None, *, collection: Optional[Collection] = None) -> FastAPI:
    """Build the web app.

    ``collection`` overrides the MongoDB collection derived from ``settings``
    (tests pass an in-memory one).
    """
    settings = settings or Settings.from_env()
    if collection is None:
        collection = connect(settings)

    store = AccountRepository(collection)
    hasher = PasswordHasher(time_cost=settings.hash_time_cost)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await run_in_threadpool(store.ensure_indexes)
        except LoginAppError:
            logger.warning("Account indexes not created; store unreachable at startup", exc_info=True)
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.auth_service = AuthService(store=store, hasher=hasher)

    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    # --- Pages ---

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request):
        return _render(request, "index.html")

    @app.get("/login", response_class=HTMLResponse)
    def login_get(request: Request):
        return _render(request, "login.html")

    @app.get("/404", response_class=HTMLResponse)
    def failure_page(request: Request):
        return _render(request, "404.html")

    @app.get("/success", response_class=HTMLResponse)
    def success_page(request: Request):
        return _render(request, "success.html")

    # --- Flows ---

    @app.post("/login")
    async def login_post(request: Request):
        fields = await _read_fields(request)
        try:
            outcome = await run_in_threadpool(_auth(request).login, fields.get("email"), fields.get("password"))
        except LoginAppError:
            logger.exception("Login error")
            return PlainTextResponse("Login error", status_code=500)

        # NOT_FOUND and BAD_CREDENTIAL share one redirect
        if isinstance(outcome, LoginSucceeded):
            return RedirectResponse(url="/success", status_code=303)
        return RedirectResponse(url="/404", status_code=303)

    @app.post("/signup")
    async def signup_post(request: Request):
        fields = await _read_fields(request)
        outcome = await run_in_threadpool(
            _auth(request).signup,
            fields.get("username"),
            fields.get("password"),
            fields.get("email"),
        )
        if not isinstance(outcome, SignupSucceeded):
            return PlainTextResponse("Error signing up", status_code=500)

        if _is_json(request):
            return JSONResponse(outcome.account.public_dict(), status_code=201)
        return RedirectResponse(url="/login", status_code=303)

    return app
