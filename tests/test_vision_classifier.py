"""Tests for the vision fallback classifier (OpenAI client stubbed)."""

import asyncio
import base64
from types import SimpleNamespace

import fitz
import pytest

from asset_extractor.config import Config
from asset_extractor.extractors.vision_classifier import VisionClassifier, parse_label
from asset_extractor.models import VisionLabel
from asset_extractor.pipeline import ExtractionOrchestrator
from asset_extractor.utils.capabilities import Capabilities


class FakeCompletions:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(reply=None, error=None):
    completions = FakeCompletions(reply=reply, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def loop_bound_client_class(reply):
    """
    Stand-in for openai.AsyncOpenAI whose connections belong to the first
    event loop that uses them, like the real httpx pool.
    """
    created = []

    class LoopBoundClient:
        def __init__(self, **kwargs):
            self.kwargs = kwargs
            self.loop = None
            self.closed = False
            self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
            created.append(self)

        async def _create(self, **kwargs):
            loop = asyncio.get_running_loop()
            if self.loop is None:
                self.loop = loop
            elif self.loop is not loop:
                raise RuntimeError("Event loop is closed")
            if self.closed:
                raise RuntimeError("Cannot send a request, as the client has been closed.")
            message = SimpleNamespace(content=reply)
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            self.closed = True

    return LoopBoundClient, created


IMAGE_B64 = base64.b64encode(b"\xff\xd8\xff\xe0fake-jpeg").decode("utf-8")


@pytest.mark.parametrize("reply,expected", [
    ("SKETCH", VisionLabel.SKETCH),
    ("map", VisionLabel.MAP),
    ("  Photo.\n", VisionLabel.PHOTO),
    ('"FORM"', VisionLabel.FORM),
    ("DRAWING", None),
    ("It looks like a PHOTO", None),
    ("", None),
    (None, None),
])
def test_parse_label(reply, expected):
    assert parse_label(reply) is expected


def test_no_api_key_skips_network(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    vision = VisionClassifier()

    assert vision.is_configured is False
    assert asyncio.run(vision.classify(IMAGE_B64)) is None
    assert vision._client is None


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert VisionClassifier().is_configured is True


def test_classify_sends_image_and_parses_reply():
    client, completions = fake_client(reply="MAP")
    vision = VisionClassifier(client=client, config=Config(vision_model_id="gpt-4o-mini"))

    label = asyncio.run(vision.classify(IMAGE_B64))

    assert label is VisionLabel.MAP
    assert len(completions.calls) == 1
    call = completions.calls[0]
    assert call["model"] == "gpt-4o-mini"
    image_part = call["messages"][1]["content"][1]
    assert image_part["image_url"]["url"] == f"data:image/jpeg;base64,{IMAGE_B64}"
    assert image_part["image_url"]["detail"] == "low"


@pytest.mark.parametrize("error", [RuntimeError("connection reset"), asyncio.TimeoutError()])
def test_client_failure_returns_none(error):
    client, _ = fake_client(error=error)
    vision = VisionClassifier(client=client)
    assert asyncio.run(vision.classify(IMAGE_B64)) is None


def test_unrecognized_reply_returns_none():
    client, _ = fake_client(reply="I think this is a diagram")
    vision = VisionClassifier(client=client)
    assert asyncio.run(vision.classify(IMAGE_B64)) is None


def test_classify_page_renders_jpeg_preview(make_pdf):
    pdf_path = make_pdf([{"text": "pole 7", "images": 1}])
    client, completions = fake_client(reply="PHOTO")
    vision = VisionClassifier(client=client)

    doc = fitz.open(pdf_path)
    try:
        label = asyncio.run(vision.classify_page(doc, 1))
    finally:
        doc.close()

    assert label is VisionLabel.PHOTO
    url = completions.calls[0]["messages"][1]["content"][1]["image_url"]["url"]
    payload = base64.b64decode(url.split(",", 1)[1])
    assert payload[:3] == b"\xff\xd8\xff"


def test_classify_page_out_of_range_returns_none(make_pdf):
    pdf_path = make_pdf([{"text": "pole 7", "images": 1}])
    client, completions = fake_client(reply="PHOTO")
    vision = VisionClassifier(client=client)

    doc = fitz.open(pdf_path)
    try:
        assert asyncio.run(vision.classify_page(doc, 5)) is None
    finally:
        doc.close()
    assert completions.calls == []


def test_client_is_opened_and_closed_per_call(monkeypatch):
    client_class, created = loop_bound_client_class("SKETCH")
    monkeypatch.setattr("openai.AsyncOpenAI", client_class)
    config = Config(vision_base_url="http://127.0.0.1:8089/v1", vision_timeout_seconds=5.0)
    vision = VisionClassifier(api_key="sk-test", config=config)

    first = asyncio.run(vision.classify(IMAGE_B64))
    second = asyncio.run(vision.classify(IMAGE_B64))

    assert first is VisionLabel.SKETCH
    assert second is VisionLabel.SKETCH
    assert len(created) == 2
    assert all(client.closed for client in created)
    assert created[0].kwargs["api_key"] == "sk-test"
    assert created[0].kwargs["base_url"] == "http://127.0.0.1:8089/v1"
    assert created[0].kwargs["timeout"] == 5.0
    assert vision._client is None


def test_repeated_analysis_runs_keep_vision_answers(make_pdf, monkeypatch):
    client_class, created = loop_bound_client_class("SKETCH")
    monkeypatch.setattr("openai.AsyncOpenAI", client_class)
    pdf_path = make_pdf([{"images": 1}])
    orchestrator = ExtractionOrchestrator(
        capabilities=Capabilities(rendering_available=True),
        vision=VisionClassifier(api_key="sk-test"),
    )

    first = asyncio.run(orchestrator.analyze_pages_by_content(pdf_path))
    second = asyncio.run(orchestrator.analyze_pages_by_content(pdf_path))

    assert first.drawings == [1]
    assert second.drawings == [1]
    assert second.photos == []
    assert len(created) == 2
