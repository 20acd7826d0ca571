import json

import httpx
import pytest

from ask_core.domain.exceptions import ApiError, NetworkError, ValidationError
from ask_core.domain.models import OpenAIProvider
from ask_core.providers.openai_client import OpenAIClient


class ChunkStream(httpx.SyncByteStream):
    """按给定的块逐次返回响应体，模拟网络分批到达。"""

    def __init__(self, chunks, fail_after=None):
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self.closed = False
        self.reads = 0

    def __iter__(self):
        for chunk in self._chunks:
            if self._fail_after is not None and self.reads >= self._fail_after:
                raise httpx.ReadError("connection reset")
            self.reads += 1
            yield chunk

    def close(self):
        self.closed = True


PROVIDER = OpenAIProvider(base_url="https://api.example.com/v1", model="gpt-x", token="sk-test")


def _delta(text: str) -> bytes:
    return ("data: " + json.dumps({"choices": [{"index": 0, "delta": {"content": text}}]}) + "\n\n").encode()


def test_openai_stream_yields_fragments_in_order():
    captured = {}
    body = ChunkStream([_delta("Hel"), _delta("lo"), b"data: [DONE]\n\n"])

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, stream=body)

    client = OpenAIClient(PROVIDER, transport=httpx.MockTransport(handler))
    with client.stream("hi") as fragments:
        assert list(fragments) == ["Hel", "lo"]

    assert captured["url"] == "https://api.example.com/v1/chat/completions"
    assert captured["auth"] == "Bearer sk-test"
    assert captured["body"]["stream"] is True
    assert body.closed


def test_openai_stream_split_object_across_reads():
    raw = _delta("joined")
    cut = len(raw) // 2
    body = ChunkStream([raw[:cut], raw[cut:], _delta("next")])

    client = OpenAIClient(PROVIDER, transport=httpx.MockTransport(lambda r: httpx.Response(200, stream=body)))
    # 被切断的对象在单块内无法修复，会被跳过，后续对象不受影响
    assert list(client.stream("hi")) == ["next"]


def test_openai_stream_error_status_raises_with_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "bad key", "type": "invalid_request_error"}})

    client = OpenAIClient(PROVIDER, transport=httpx.MockTransport(handler))
    with pytest.raises(ApiError) as exc:
        client.stream("hi")
    assert "bad key" in exc.value.message
    assert exc.value.http_status == 401
    assert exc.value.extra["provider"] == "openai"


def test_openai_stream_error_status_unexpected_body():
    client = OpenAIClient(
        PROVIDER,
        transport=httpx.MockTransport(lambda r: httpx.Response(500, text="<html>oops</html>")),
    )
    with pytest.raises(ApiError) as exc:
        client.stream("hi")
    assert "failed to parse" in exc.value.message
    assert exc.value.http_status == 500


def test_openai_stream_connection_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = OpenAIClient(PROVIDER, transport=httpx.MockTransport(handler))
    with pytest.raises(NetworkError):
        client.stream("hi")


def test_openai_stream_read_failure_midway():
    body = ChunkStream([_delta("a"), _delta("b")], fail_after=1)
    client = OpenAIClient(PROVIDER, transport=httpx.MockTransport(lambda r: httpx.Response(200, stream=body)))
    fragments = client.stream("hi")
    assert next(fragments) == "a"
    with pytest.raises(NetworkError):
        next(fragments)
    assert fragments.closed
    assert body.closed


def test_openai_stream_abandoned_early_releases_connection():
    body = ChunkStream([_delta("a"), _delta("b"), _delta("c")])
    client = OpenAIClient(PROVIDER, transport=httpx.MockTransport(lambda r: httpx.Response(200, stream=body)))
    with client.stream("hi") as fragments:
        assert next(fragments) == "a"
    assert body.closed
    assert body.reads == 1
    assert list(fragments) == []


def test_openai_stream_requires_token():
    client = OpenAIClient(OpenAIProvider(base_url="https://api.example.com/v1", model="m", token=""))
    with pytest.raises(ValidationError):
        client.stream("hi")


def test_openai_stream_rejects_non_ascii_token():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request should not be sent")

    for token in ("sk-你好", "sk-abc def"):
        client = OpenAIClient(
            OpenAIProvider(base_url="https://api.example.com/v1", model="m", token=token),
            transport=httpx.MockTransport(handler),
        )
        with pytest.raises(ValidationError) as exc:
            client.stream("hi")
        assert exc.value.code == "INVALID_API_KEY"
