import json

import httpx
import pytest
import respx

from textforge.ai import GENERATE_PROMPT, TRANSFORM_PROMPT, AIError, ChatClient

BASE = "http://ai.test/v1"


def _reply(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def client():
    with httpx.Client() as http:
        yield ChatClient("placeholder", BASE, http)


def test_transform_request(client):
    with respx.mock(base_url=BASE) as router:
        route = router.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=_reply("done"))
        )
        assert client.transform("hello") == "done"
        request = route.calls.last.request
    sent = json.loads(request.content)
    assert sent["model"] == "gpt-4"
    assert sent["messages"] == [
        {"role": "system", "content": TRANSFORM_PROMPT},
        {"role": "user", "content": "hello"},
    ]
    assert request.headers["Authorization"] == "Bearer placeholder"


def test_generate_request(client):
    with respx.mock(base_url=BASE) as router:
        route = router.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=_reply("poem"))
        )
        assert client.generate("write") == "poem"
        sent = json.loads(route.calls.last.request.content)
    assert sent["model"] == "gpt-4o"
    assert sent["messages"][0] == {"role": "system", "content": GENERATE_PROMPT}
    assert sent["messages"][1] == {"role": "user", "content": "write"}


def test_complete_uses_given_model(client):
    with respx.mock(base_url=BASE) as router:
        route = router.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=_reply("ok"))
        )
        assert client.complete("custom-model", "sys", "user text") == "ok"
        sent = json.loads(route.calls.last.request.content)
    assert sent["model"] == "custom-model"
    assert [m["content"] for m in sent["messages"]] == ["sys", "user text"]


def test_http_error_is_raised(client):
    with respx.mock(base_url=BASE) as router:
        router.post("/chat/completions").mock(
            return_value=httpx.Response(401, json={"error": {"message": "bad key"}})
        )
        with pytest.raises(AIError, match="bad key") as info:
            client.transform("hello")
    assert info.value.status_code == 401


def test_empty_choices(client):
    with respx.mock(base_url=BASE) as router:
        router.post("/chat/completions").mock(
            return_value=httpx.Response(200, json={"choices": []})
        )
        with pytest.raises(AIError):
            client.generate("hello")


def test_connection_failure(client):
    with respx.mock(base_url=BASE) as router:
        router.post("/chat/completions").mock(side_effect=httpx.ConnectError("boom"))
        with pytest.raises(AIError, match="boom"):
            client.transform("hello")