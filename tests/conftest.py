import httpx
import pytest
import pytest_asyncio

from order_intake.config import Settings, get_settings
from order_intake.main import app


@pytest.fixture
def settings():
    return Settings(
        baserow_api_token="test-token",
        baserow_table_id="123",
        tg_bot_token="bot-token",
        tg_chat_id="-1001",
    )


@pytest_asyncio.fixture
async def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def order_payload():
    return {"email": "buyer@example.com", "productName": "Course", "price": 1500}
