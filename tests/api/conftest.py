"""Fixtures for the HTTP and WebSocket layer."""

import pytest
from random import Random

from api.main import app
from api.websocket import ConnectionManager
from config import TableConfig
from core.game import TableGame


@pytest.fixture
def fresh_table():
    """Give the app an empty table and no connections."""
    manager = ConnectionManager()
    table = TableGame(TableConfig(capacity=10, num_decks=6), dispatcher=manager, rng=Random(7))
    app.state.manager = manager
    app.state.table = table
    return table
