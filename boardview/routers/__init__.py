# File: /boardview/routers/__init__.py | Version: 1.0 | Path: /boardview/routers/__init__.py
"""
Router package exports.

Keeping these explicit helps static analyzers and avoids surprises
when importing submodules like: `from boardview.routers import views as views_router`.
"""
from . import boards, cards, health, members, views

__all__ = ["boards", "cards", "health", "members", "views"]
