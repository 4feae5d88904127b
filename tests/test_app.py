from fastapi.testclient import TestClient

from ggstore import __version__
from ggstore.main import create_app


def test_lifespan_opens_and_closes_container(settings):
    app = create_app(settings, run_bot=False)

    with TestClient(app) as client:
        assert app.state.container is not None
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__, "telegram": False}
    assert app.state.container is None


def test_webhook_only_mode_without_token(settings):
    assert settings.telegram_enabled is False
    app = create_app(settings)

    with TestClient(app) as client:
        response = client.post("/webhook/wegate-pix", content=b"{}", headers={"X-Wegate-Signature": "nope"})

    assert response.status_code == 403
