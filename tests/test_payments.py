import base64
import json
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from ggstore.core.config import PagSeguroSettings, WegateSettings
from ggstore.modules.ledger import InvalidAmountError
from ggstore.modules.payments import (
    GatewayError,
    MalformedNotificationError,
    MalformedReferenceError,
    PagSeguroGateway,
    UnknownProviderError,
    WegateGateway,
    build_reference,
    decode_payload,
    parse_reference,
)
from ggstore.modules.payments.qr import decode_data_uri
from ggstore.modules.users import UserNotFoundError

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_reference_round_trip():
    reference = build_reference(123456789, now_ms=1700000000000)

    assert reference == "123456789-1700000000000"
    assert parse_reference(reference) == 123456789
    assert parse_reference("9223372036854775807-1") == 2**63 - 1


@pytest.mark.parametrize("reference", [None, "", "abc-123", "-123", "１２３-1", 42, "9223372036854775808-1"])
def test_malformed_references(reference):
    with pytest.raises(MalformedReferenceError):
        parse_reference(reference)


def test_decode_payload_json_and_form():
    assert decode_payload(b'{"a": 1}', "application/json") == {"a": 1}
    assert decode_payload(b"a=1&b=x", "application/x-www-form-urlencoded; charset=utf-8") == {"a": "1", "b": "x"}

    with pytest.raises(MalformedNotificationError):
        decode_payload(b"[1, 2]", "application/json")
    with pytest.raises(MalformedNotificationError):
        decode_payload(b"not json", None)


def test_decode_data_uri():
    encoded = base64.b64encode(PNG_MAGIC).decode()

    assert decode_data_uri(f"data:image/png;base64,{encoded}") == PNG_MAGIC
    assert decode_data_uri("00020126PIX") is None
    assert decode_data_uri("data:image/png;base64,@@@") is None


async def test_wegate_create_intent_sends_bearer_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["authorization"]
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        image = base64.b64encode(PNG_MAGIC).decode()
        return httpx.Response(
            200,
            json={"qr_code_image_base64_data": f"data:image/png;base64,{image}", "pix_code": "000201PIX"},
        )

    settings = WegateSettings(api_url="https://wegate.test/v1/pix/", api_key="k", pix_key="chave")
    async with _client(handler) as client:
        intent = await WegateGateway(settings, client).create_intent(Decimal("10.00"), 7, "dana", "7-1")

    assert seen["auth"] == "Bearer k"
    assert seen["url"] == "https://wegate.test/v1/pix/generate"
    assert seen["body"] == {"value": "10.00", "description": "Depósito para o usuário dana", "reference_id": "7-1"}
    assert intent.qr_image == PNG_MAGIC
    assert intent.pay_code == "000201PIX"
    assert intent.pix_key == "chave"


async def test_wegate_http_error_becomes_gateway_error():
    def handler(request):
        return httpx.Response(500, text="boom")

    async with _client(handler) as client:
        gateway = WegateGateway(WegateSettings(api_key="k"), client)
        with pytest.raises(GatewayError):
            await gateway.create_intent(Decimal("10"), 1, None, "1-1")


async def test_wegate_explicit_failure_becomes_gateway_error():
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": "limite excedido"})

    async with _client(handler) as client:
        gateway = WegateGateway(WegateSettings(api_key="k"), client)
        with pytest.raises(GatewayError, match="limite excedido"):
            await gateway.create_intent(Decimal("10"), 1, None, "1-1")


async def test_wegate_without_credentials_fails_fast():
    def handler(request):
        raise AssertionError("no request expected")

    async with _client(handler) as client:
        with pytest.raises(GatewayError):
            await WegateGateway(WegateSettings(api_key=""), client).create_intent(Decimal("10"), 1, None, "1-1")


def test_wegate_parse_confirmed_notification():
    gateway = WegateGateway(WegateSettings(), httpx.AsyncClient())
    [notification] = gateway.parse_notification(
        {
            "event": "pix.payment.confirmed",
            "status": "completed",
            "reference_id": "5-1700",
            "amount": "50.00",
            "id": 991,
        }
    )

    assert notification.amount == Decimal("50.00")
    assert notification.payment_id == "991"
    assert notification.payment_method == "pix_wegate"


def test_wegate_payment_id_falls_back_to_reference():
    gateway = WegateGateway(WegateSettings(), httpx.AsyncClient())
    [notification] = gateway.parse_notification(
        {"event": "pix.payment.confirmed", "status": "completed", "reference_id": "5-1700", "amount": 12.5}
    )

    assert notification.payment_id == "5-1700"
    assert notification.amount == Decimal("12.50")


def test_wegate_ignores_other_events():
    gateway = WegateGateway(WegateSettings(), httpx.AsyncClient())

    assert gateway.parse_notification({"event": "pix.payment.created", "status": "pending"}) == []


@pytest.mark.parametrize(
    "payload",
    [
        {"event": "pix.payment.confirmed", "status": "completed", "amount": "10"},
        {"event": "pix.payment.confirmed", "status": "completed", "reference_id": "1-1"},
        {"event": "pix.payment.confirmed", "status": "completed", "reference_id": "1-1", "amount": "-5"},
        {"event": "pix.payment.confirmed", "status": "completed", "reference_id": "1-1", "amount": "abc"},
    ],
)
def test_wegate_rejects_incomplete_confirmation(payload):
    gateway = WegateGateway(WegateSettings(), httpx.AsyncClient())

    with pytest.raises(MalformedNotificationError):
        gateway.parse_notification(payload)


async def test_pagseguro_create_order():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": "ORDE_1", "qr_codes": [{"text": "000201PAG"}]})

    settings = PagSeguroSettings(
        api_url="https://pagseguro.test",
        token="t",
        notification_url="https://loja.test/webhook/pagseguro",
    )
    clock = lambda: datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    async with _client(handler) as client:
        intent = await PagSeguroGateway(settings, client, clock).create_intent(Decimal("25.50"), 3, None, "3-9")

    assert seen["auth"] == "Bearer t"
    assert seen["body"]["reference_id"] == "3-9"
    assert seen["body"]["qr_codes"][0]["amount"] == {"value": 2550}
    assert seen["body"]["qr_codes"][0]["expiration_date"] == "2026-01-01T12:30:00+00:00"
    assert seen["body"]["notification_urls"] == ["https://loja.test/webhook/pagseguro"]
    assert intent.provider_order_id == "ORDE_1"
    assert intent.pay_code == "000201PAG"
    assert intent.qr_image is None
    assert intent.qr_content == "000201PAG"


async def test_pagseguro_order_without_qr_code_fails():
    def handler(request):
        return httpx.Response(201, json={"id": "ORDE_1", "qr_codes": []})

    async with _client(handler) as client:
        gateway = PagSeguroGateway(PagSeguroSettings(token="t"), client)
        with pytest.raises(GatewayError):
            await gateway.create_intent(Decimal("10"), 1, None, "1-1")


def test_pagseguro_parses_paid_charges_only():
    gateway = PagSeguroGateway(PagSeguroSettings(), httpx.AsyncClient())
    notifications = gateway.parse_notification(
        {
            "id": "ORDE_1",
            "reference_id": "8-100",
            "charges": [
                {"id": "CHAR_1", "status": "PAID", "amount": {"value": 1000}, "payment_method": {"type": "PIX"}},
                {"id": "CHAR_2", "status": "DECLINED", "amount": {"value": 500}},
                {
                    "id": "CHAR_3",
                    "status": "PAID",
                    "amount": {"value": 2599},
                    "payment_method": {"type": "CREDIT_CARD"},
                },
            ],
        }
    )

    assert [(n.payment_id, n.amount, n.payment_method) for n in notifications] == [
        ("CHAR_1", Decimal("10.00"), "pix_pagseguro"),
        ("CHAR_3", Decimal("25.99"), "card_pagseguro"),
    ]


def test_pagseguro_paid_charge_requires_reference():
    gateway = PagSeguroGateway(PagSeguroSettings(), httpx.AsyncClient())

    with pytest.raises(MalformedNotificationError):
        gateway.parse_notification({"id": "ORDE_1", "charges": [{"id": "C", "status": "PAID", "amount": {"value": 1}}]})


async def test_deposit_intent_renders_qr_locally(container, make_user):
    await make_user(1)

    instructions = await container.deposits.create_intent(1, "10,50")

    assert instructions.provider == "wegate"
    assert instructions.amount == Decimal("10.50")
    assert instructions.reference_id.startswith("1-")
    assert instructions.pay_code.startswith("00020126PIXCODE")
    assert instructions.qr_png.startswith(PNG_MAGIC)
    assert instructions.pix_key == "loja@pix.test"
    assert await container.balances.get_balance(1) == Decimal("0.00")


async def test_deposit_intent_with_pagseguro(container, make_user):
    await make_user(1)

    instructions = await container.deposits.create_intent(1, "30", "PagSeguro")

    assert instructions.provider == "pagseguro"
    assert instructions.provider_order_id == "ORDE_TEST"
    assert instructions.qr_png.startswith(PNG_MAGIC)


@pytest.mark.parametrize("amount", ["0", "-10", "0.50", "5000.01", "abc", "10.001"])
async def test_deposit_intent_validates_amount(container, make_user, amount):
    await make_user(1)

    with pytest.raises(InvalidAmountError):
        await container.deposits.create_intent(1, amount)


async def test_deposit_intent_requires_registration(container):
    with pytest.raises(UserNotFoundError):
        await container.deposits.create_intent(404, "10")


async def test_deposit_intent_unknown_provider(container, make_user):
    await make_user(1)

    with pytest.raises(UnknownProviderError):
        await container.deposits.create_intent(1, "10", "paypal")
