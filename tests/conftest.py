import json
import random
from decimal import Decimal
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from ggstore.core.config import Settings
from ggstore.core.container import ApplicationContainer
from ggstore.infrastructure.database import Database
from ggstore.modules.ledger import TransactionKind

WEGATE_SECRET = "wegate-test-secret"
PAGSEGURO_SECRET = "pagseguro-test-secret"


def gateway_handler(request: httpx.Request) -> httpx.Response:
    """Fake provider APIs answering like the sandboxes do."""
    if request.url.path.endswith("/generate"):
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "id": f"wg-{body['reference_id']}",
                "pix_code": f"00020126PIXCODE{body['reference_id']}",
                "qrcode_data": f"00020126PIXCODE{body['reference_id']}",
            },
        )
    if request.url.path.endswith("/orders"):
        body = json.loads(request.content)
        return httpx.Response(
            201,
            json={
                "id": "ORDE_TEST",
                "reference_id": body["reference_id"],
                "qr_codes": [{"id": "QRCO_TEST", "text": "00020101PAGSEGUROPIX"}],
            },
        )
    return httpx.Response(404)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        database={"url": f"sqlite+aiosqlite:///{tmp_path / 'ggstore-test.db'}"},
        telegram={"bot_token": ""},
        wegate={
            "api_url": "https://wegate.test/v1/pix",
            "api_key": "wegate-key",
            "pix_key": "loja@pix.test",
            "webhook_secret": WEGATE_SECRET,
        },
        pagseguro={
            "api_url": "https://pagseguro.test",
            "token": "pagseguro-token",
            "webhook_secret": PAGSEGURO_SECRET,
        },
        checker={"min_delay": 0, "max_delay": 0},
    )


@pytest_asyncio.fixture
async def database(settings) -> AsyncGenerator[Database, None]:
    db = Database.from_settings(settings.database)
    db.open()
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def container(settings, database) -> AsyncGenerator[ApplicationContainer, None]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(gateway_handler))
    app_container = ApplicationContainer.build(
        settings,
        database=database,
        http_client=client,
        rng=random.Random(1234),
    )
    await app_container.start()
    yield app_container
    await app_container.close()


@pytest.fixture
def make_user(container):
    async def _make(user_id: int, balance: str = "0", *, admin: bool = False):
        await container.users.ensure_user(user_id, f"user{user_id}")
        if Decimal(balance):
            await container.balances.apply_transaction(user_id, balance, TransactionKind.ADMIN_ADJUSTMENT, "seed")
        if admin:
            await container.users.set_admin(user_id, True)
        return await container.users.require_user(user_id)

    return _make
