import logging

from fastapi.testclient import TestClient

from chat_relay.core.settings import Settings
from chat_relay.main import create_app


def _settings(**overrides) -> Settings:
    values = {"AI_SERVICE": "zhipu", "ENVIRONMENT": "production"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class _FakeProvider:
    def __init__(self, reply="hi there", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, messages, temperature):
        self.calls.append((list(messages), temperature))
        if self.error is not None:
            raise self.error
        return self.reply


class _RecordingFactory:
    def __init__(self, provider):
        self.provider = provider
        self.built = []

    def __call__(self, name, settings):
        self.built.append(name)
        return self.provider


def _client(settings: Settings, factory: _RecordingFactory) -> TestClient:
    app = create_app(settings)

    # Lazy import to avoid building a real provider client
    import chat_relay.dependencies as deps

    app.dependency_overrides[deps.get_provider_factory] = lambda: factory
    return TestClient(app)


def test_chat_happy_path_without_history():
    factory = _RecordingFactory(_FakeProvider(reply="hi there"))
    client = _client(_settings(), factory)

    r = client.post("/api/chat", json={"message": "hello"})

    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "response": "hi there",
        "history": [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "hi there"},
        ],
    }


def test_chat_appends_two_turns_to_history():
    provider = _FakeProvider(reply="Paris")
    factory = _RecordingFactory(provider)
    client = _client(_settings(), factory)
    history = [
        {"role": "user", "content": "I am planning a trip."},
        {"role": "assistant", "content": "Where to?"},
    ]

    r = client.post(
        "/api/chat",
        json={"message": "What is the capital of France?", "history": history},
    )

    assert r.status_code == 200
    assert r.json()["history"] == history + [
        {"role": "user", "content": "What is the capital of France?"},
        {"role": "assistant", "content": "Paris"},
    ]

    messages, temperature = provider.calls[0]
    assert [m.model_dump() for m in messages] == history + [
        {"role": "user", "content": "What is the capital of France?"}
    ]
    assert temperature == 0.7


def test_chat_empty_message_is_rejected_without_provider_call(caplog):
    caplog.set_level(logging.INFO, logger="chat_relay")
    provider = _FakeProvider()
    factory = _RecordingFactory(provider)
    client = _client(_settings(), factory)

    for body in ({"message": ""}, {"message": "   "}, {}, {"history": []}):
        r = client.post("/api/chat", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Please enter a message"}

    assert factory.built == []
    assert provider.calls == []
    assert not [rec for rec in caplog.records if rec.levelno >= logging.ERROR]
    assert any(
        rec.levelno == logging.INFO and rec.name == "chat_relay.api.chat"
        for rec in caplog.records
    )


def test_chat_unknown_ai_service_is_configuration_error(caplog):
    provider = _FakeProvider()
    factory = _RecordingFactory(provider)
    client = _client(_settings(AI_SERVICE="llama", ENVIRONMENT="development"), factory)

    r = client.post("/api/chat", json={"message": "hi"})

    assert r.status_code == 500
    body = r.json()
    assert set(body) == {"error"}
    assert body["error"].startswith("No valid AI service is configured")
    assert factory.built == []
    assert provider.calls == []

    errors = [rec for rec in caplog.records if rec.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].name == "chat_relay.api.chat"
    assert errors[0].exc_info is None


def test_chat_provider_failure_hides_details_in_production(caplog):
    factory = _RecordingFactory(_FakeProvider(error=ConnectionError("network down")))
    client = _client(_settings(ENVIRONMENT="production"), factory)

    r = client.post("/api/chat", json={"message": "hi"})

    assert r.status_code == 500
    assert r.json() == {"error": "Chat failed, please try again"}

    errors = [rec for rec in caplog.records if rec.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].name == "chat_relay.api.chat"
    assert errors[0].exc_info is not None
    assert isinstance(errors[0].exc_info[1], ConnectionError)


def test_chat_provider_failure_exposes_details_in_development():
    factory = _RecordingFactory(_FakeProvider(error=ConnectionError("network down")))
    client = _client(_settings(ENVIRONMENT="development"), factory)

    r = client.post("/api/chat", json={"message": "hi"})

    assert r.status_code == 500
    assert r.json() == {
        "error": "Chat failed, please try again",
        "details": "network down",
    }


def test_chat_provider_construction_failure_is_server_error():
    def failing_factory(name, settings):
        raise RuntimeError("ZHIPU_API_KEY is not configured")

    app = create_app(_settings(ENVIRONMENT="dev"))

    import chat_relay.dependencies as deps

    app.dependency_overrides[deps.get_provider_factory] = lambda: failing_factory
    client = TestClient(app)

    r = client.post("/api/chat", json={"message": "hi"})

    assert r.status_code == 500
    assert r.json()["details"] == "ZHIPU_API_KEY is not configured"


def test_chat_unknown_role_is_rejected():
    provider = _FakeProvider()
    factory = _RecordingFactory(provider)
    client = _client(_settings(), factory)

    r = client.post(
        "/api/chat",
        json={"message": "hi", "history": [{"role": "system", "content": "x"}]},
    )

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request payload"}
    assert provider.calls == []


def test_chat_malformed_payload_details_carry_only_error_messages():
    client = _client(_settings(ENVIRONMENT="development"), _RecordingFactory(_FakeProvider()))

    r = client.post("/api/chat", json=["x"])

    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid request payload"
    assert body["details"]
    assert ".py" not in body["details"]
    assert "line" not in body["details"]


def test_chat_cors_preflight_allows_any_origin():
    client = _client(_settings(), _RecordingFactory(_FakeProvider()))

    r = client.options(
        "/api/chat",
        headers={
            "Origin": "https://frontend.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "https://frontend.example.com"
    assert r.headers["access-control-allow-credentials"] == "true"
    assert "POST" in r.headers["access-control-allow-methods"]
