import pytest
from fastapi.testclient import TestClient

from ticketdesk.main import create_app
from ticketdesk.metrics import create_metrics_registry
from ticketdesk.tickets import TicketService, TicketStore


@pytest.fixture
def store() -> TicketStore:
    return TicketStore()


@pytest.fixture
def service(store: TicketStore) -> TicketService:
    return TicketService(store, metrics=create_metrics_registry())


@pytest.fixture
def client(service: TicketService):
    app = create_app(service)
    with TestClient(app) as test_client:
        yield test_client
