import pytest

from conftest import FakeChatModel, FakeSearcher


@pytest.mark.asyncio
async def test_chat_returns_reply(make_client, hits):
    searcher = FakeSearcher(hits)
    client = await make_client(searcher=searcher, llm=FakeChatModel("Use the X200Pro."))

    response = await client.post("/api/chat", json={"message": "Which excavator?"})

    assert response.status_code == 200
    assert response.json() == {"reply": "Use the X200Pro."}
    assert searcher.calls == [("Which excavator?", None, 5)]


@pytest.mark.asyncio
async def test_chat_empty_model_answer_is_empty_reply(make_client):
    client = await make_client(llm=FakeChatModel(""))

    response = await client.post("/api/chat", json={"message": "hello"})

    assert response.status_code == 200
    assert response.json() == {"reply": ""}


@pytest.mark.asyncio
async def test_chat_missing_message_is_passed_through(make_client):
    searcher = FakeSearcher()
    client = await make_client(searcher=searcher, llm=FakeChatModel("ok"))

    response = await client.post("/api/chat", json={})

    assert response.status_code == 200
    assert searcher.calls == [("", None, 5)]


@pytest.mark.asyncio
async def test_chat_null_message_is_passed_through(make_client):
    searcher = FakeSearcher()
    client = await make_client(searcher=searcher, llm=FakeChatModel("ok"))

    response = await client.post("/api/chat", json={"message": None})

    assert response.status_code == 200
    assert response.json() == {"reply": "ok"}
    assert searcher.calls == [("", None, 5)]


@pytest.mark.asyncio
async def test_chat_non_string_message_is_rejected(make_client):
    searcher = FakeSearcher()
    client = await make_client(searcher=searcher)

    response = await client.post("/api/chat", json={"message": ["a", "b"]})

    assert response.status_code == 422
    assert searcher.calls == []


@pytest.mark.asyncio
async def test_chat_search_failure_is_internal_error(make_client):
    llm = FakeChatModel("never used")
    client = await make_client(searcher=FakeSearcher(error=RuntimeError("search down")), llm=llm)

    response = await client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error"}
    assert llm.calls == []


@pytest.mark.asyncio
async def test_chat_completion_failure_is_internal_error(make_client, hits):
    client = await make_client(
        searcher=FakeSearcher(hits),
        llm=FakeChatModel(error=TimeoutError("completion timed out")),
    )

    response = await client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error"}


@pytest.mark.asyncio
async def test_machines_endpoint(make_client, blob_store):
    client = await make_client(llm=FakeChatModel("excavator"), blob_store=blob_store)

    response = await client.post(
        "/api/machines", json={"vehicle_type": "digger", "model_keyword": "pro"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "excavator"
    assert body["resolved"] is True
    assert body["entries"] == [
        {"manufacturer": "Acme", "models": ["X200Pro"]},
        {"manufacturer": "Bolt", "models": ["PRO-9"]},
    ]


@pytest.mark.asyncio
async def test_machines_endpoint_unresolved(make_client, blob_store):
    client = await make_client(llm=FakeChatModel("Excavators."), blob_store=blob_store)

    response = await client.post("/api/machines", json={"vehicle_type": "digger"})

    assert response.status_code == 200
    body = response.json()
    assert body["resolved"] is False
    assert body["category"] is None
    assert body["answer"] == "Excavators."
    assert body["entries"] == []


@pytest.mark.asyncio
async def test_machines_endpoint_missing_catalog(make_client):
    client = await make_client(llm=FakeChatModel("excavator"))

    response = await client.post("/api/machines", json={"vehicle_type": "digger"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error"}


@pytest.mark.asyncio
async def test_health(make_client):
    client = await make_client()

    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_index_page_served(make_client):
    client = await make_client()

    response = await client.get("/")

    assert response.status_code == 200
    assert "Sales Genius" in response.text
