import base64

import pytest

from textforge.ai import AIError
from textforge.app import create_app, main
from textforge.cache import TextCache
from textforge.handlers import TextService, string_to_cid


class FakeAI:
    def __init__(self, answer="done", error=None):
        self.answer = answer
        self.error = error

    def transform(self, text):
        if self.error:
            raise self.error
        return self.answer

    def generate(self, text):
        if self.error:
            raise self.error
        return self.answer


def make_client(tmp_path, ai=None):
    service = TextService(ai or FakeAI(), TextCache(tmp_path / "cache"))
    return create_app(service).test_client()


def decode(value):
    return base64.b64decode(value).decode("utf-8")


def test_transform_get_json(tmp_path):
    client = make_client(tmp_path, FakeAI(answer="hola"))
    response = client.get("/transform", query_string={"lang": "es", "text": "hello"})
    assert response.status_code == 200
    body = response.get_json()
    assert decode(body["text"]) == "hola"
    assert body["cid"] == string_to_cid("es" + "hello")


def test_transform_post_form(tmp_path):
    client = make_client(tmp_path, FakeAI(answer="ok"))
    response = client.post("/transform", data={"style": "brief", "text": "long text"})
    assert response.status_code == 200
    assert decode(response.get_json()["text"]) == "ok"


def test_post_ignores_query_parameters(tmp_path):
    client = make_client(tmp_path)
    response = client.post("/transform?lang=en", data={"text": "hi"})
    assert response.status_code == 400
    assert response.get_json() == {"error": "bad request: need valid lang, style or format"}


def test_generate_error_is_bad_request(tmp_path):
    client = make_client(tmp_path)
    response = client.get("/generate", query_string={"style": "s", "text": "t"})
    assert response.status_code == 400
    assert response.get_json() == {"error": "bad request: lang is not valid"}


def test_ai_failure_reported(tmp_path):
    client = make_client(tmp_path, FakeAI(error=AIError("quota")))
    response = client.get("/generate", query_string={"lang": "en", "style": "s", "text": "t"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "bad request: quota"


def test_ini_response_type(tmp_path):
    client = make_client(tmp_path, FakeAI(answer="abc"))
    response = client.get(
        "/generate", query_string={"lang": "en", "style": "s", "text": "t", "type": "ini"}
    )
    assert response.status_code == 200
    expected = "text = " + base64.b64encode(b"abc").decode("ascii")
    assert response.get_data(as_text=True) == expected


def test_jsonp_uses_callback(tmp_path):
    client = make_client(tmp_path, FakeAI(answer="abc"))
    response = client.get(
        "/generate",
        query_string={"lang": "en", "style": "s", "text": "t", "type": "jsonp", "callback": "cb"},
    )
    text = response.get_data(as_text=True)
    assert text.startswith("cb(")
    assert text.endswith(");")


def test_unknown_type_writes_nothing(tmp_path):
    client = make_client(tmp_path)
    response = client.get(
        "/generate", query_string={"lang": "en", "style": "s", "text": "t", "type": "csv"}
    )
    assert response.status_code == 200
    assert response.get_data() == b""


@pytest.mark.parametrize("method", ["get", "post"])
def test_assist_is_empty(tmp_path, method):
    client = make_client(tmp_path)
    response = getattr(client, method)("/assist")
    assert response.status_code == 200
    assert response.get_data() == b""


def test_main_missing_config_fails(tmp_path):
    assert main(["--config", str(tmp_path / "missing.ini")]) == 1


def test_main_incomplete_config_fails(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("port = 8080\nopenai = placeholder\ncache = ./cache\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 1