"""Shared fixtures: in-memory storage and a recording fake backend."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from querydesk.dtos import DbType, Profile
from querydesk.repositories import InMemoryKeyValueStore
from querydesk.services import ConfigStore, QueryOrchestrator


class FakeBackend:
    """BackendClient double that records every invocation.

    ``responses`` maps a command to either a string (returned as-is), an
    exception instance (raised) or a callable taking the arguments.
    ``gates`` maps a command to an ``asyncio.Event`` the call waits on.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.responses: Dict[str, Any] = {
            "connect": '{"msg": "success"}',
            "ask": json.dumps({"question": "q", "sql": "SELECT 1;", "data": [{"n": 1}]}),
            "ask_for_sql": json.dumps({"question": "q", "sql": "SELECT 1;", "data": None}),
            "query": json.dumps({"question": "", "sql": "SELECT 1", "data": [{"n": 1}]}),
        }
        self.gates: Dict[str, asyncio.Event] = {}

    async def invoke(self, command: str, **arguments: Any) -> str:
        self.calls.append((command, arguments))
        gate = self.gates.get(command)
        if gate is not None:
            await gate.wait()
        response = self.responses[command]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(**arguments)
        return response

    def commands(self) -> List[str]:
        return [command for command, _ in self.calls]


def build_profile(**overrides: Any) -> Profile:
    fields: Dict[str, Any] = {
        "db_type": DbType.POSTGRESQL,
        "connection_string": "postgresql://app@localhost:5432/shop",
        "ai_model_path": "/models/phi3.gguf",
        "sql_knowledge": "orders.total is in cents",
    }
    fields.update(overrides)
    return Profile(**fields)


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def store(storage: InMemoryKeyValueStore) -> ConfigStore:
    return ConfigStore(storage)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def orchestrator(store: ConfigStore, backend: FakeBackend) -> QueryOrchestrator:
    return QueryOrchestrator(store, backend)


@pytest.fixture
def connected(store: ConfigStore) -> Optional[Profile]:
    """Store one profile and mark it active without going through connect."""
    saved = store.upsert(build_profile())
    store.set_active(saved)
    return saved


@pytest.fixture
def make_profile():
    """Factory for complete, unsaved profiles."""
    return build_profile
