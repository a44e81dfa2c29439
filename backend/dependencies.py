"""FastAPI dependencies. Services are built once in create_app and kept on app.state."""

from fastapi import Request

from config import Settings
from services.encyclopedia import Encyclopedia
from services.opendota import OpenDotaClient
from services.orchestrator import CacheOrchestrator
from services.records import RecordStore


def get_encyclopedia(request: Request) -> Encyclopedia:
    return request.app.state.encyclopedia


def get_orchestrator(request: Request) -> CacheOrchestrator:
    return request.app.state.encyclopedia.orchestrator


def get_client(request: Request) -> OpenDotaClient:
    return request.app.state.encyclopedia.client


def get_records(request: Request) -> RecordStore:
    return request.app.state.encyclopedia.records


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
