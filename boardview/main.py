# File: /boardview/main.py | Version: 1.0 | Title: FastAPI App (board/view card projection service)
from __future__ import annotations

import logging

from fastapi import FastAPI

from boardview.core.config import settings
from boardview.core.logging import configure_logging
from boardview.crud.mutator import UndoRegistry
from boardview.observability.sentry import init_sentry_if_configured
from boardview.routers import boards, cards, health, members, views

# Initialize logging & observability
configure_logging()
init_sentry_if_configured()

log = logging.getLogger(__name__)

# App
app = FastAPI(title="Board View API")

# Caller-held undo stacks, one per view
app.state.undo_registry = UndoRegistry()

app.include_router(health.router)
app.include_router(boards.router)
app.include_router(views.router)
app.include_router(cards.router)
app.include_router(members.router)

# Optional standardized error responses
if getattr(settings, "ENABLE_STD_ERRORS", False):
    from boardview.core.error_handlers import register_exception_handlers

    register_exception_handlers(app)
    log.info("Standardized error responses enabled.")
