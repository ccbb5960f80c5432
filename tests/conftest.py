"""
pytest configuration and fixtures for the employee directory test suite
The application runs in-process over httpx's ASGI transport against an in-memory database.
"""

import httpx
import pytest
import pytest_asyncio

from employee_directory.app import create_app
from infrastructure import InMemoryDatabase, LANDING_PAGE


@pytest.fixture
def database():
    return InMemoryDatabase()


@pytest.fixture
def static_dir(tmp_path):
    (tmp_path / "index.html").write_text(LANDING_PAGE)
    (tmp_path / "styles.css").write_text("body { margin: 0; }")
    return tmp_path


@pytest.fixture
def app(database, static_dir):
    return create_app(database=database, static_dir=static_dir)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def create_employee(client):
    """Create an employee through the API and return the response body"""

    async def _create(name: str, email: str, phone=None):
        payload = {"name": name, "email": email}
        if phone is not None:
            payload["phone"] = phone
        response = await client.post("/api/employees", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
