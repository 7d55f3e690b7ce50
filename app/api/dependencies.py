"""Shared FastAPI dependencies."""

from fastapi import Request

from app.config import Settings, settings
from app.services.cooldown import CooldownGate
from app.services.workflow import WorkflowDispatcher
from lunch_scraper.storage import JsonMenuStore


def get_settings() -> Settings:
    return settings


def get_menu_store() -> JsonMenuStore:
    return JsonMenuStore(settings.data_dir)


def get_cooldown_gate(request: Request) -> CooldownGate:
    """The application's single cooldown gate, created with the app."""
    return request.app.state.cooldown_gate


def get_workflow_dispatcher() -> WorkflowDispatcher:
    return WorkflowDispatcher(settings)
