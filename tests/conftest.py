import base64
import json
from types import SimpleNamespace

import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.utils import analysis_utils


class FakeMessages:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def text_response(text: str):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


def fake_model(monkeypatch, response=None, error=None):
    messages = FakeMessages(response=response, error=error)
    monkeypatch.setattr(analysis_utils, "get_client", lambda: SimpleNamespace(messages=messages))
    return messages


def encode_png(width: int, height: int) -> bytes:
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, : width // 2] = (40, 80, 160)
    ok, buffer = cv2.imencode(".png", img)
    assert ok
    return buffer.tobytes()


@pytest.fixture(autouse=True)
def clear_storage():
    analysis_utils.storage.clear()
    yield
    analysis_utils.storage.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def image_b64():
    return base64.b64encode(encode_png(64, 48)).decode("ascii")


@pytest.fixture
def sample_analysis():
    return {
        "pattern_name": "Persian Herati",
        "pattern_origin": "Isfahan, Iran",
        "history_and_origins": {
            "summary": "A lattice of rosettes and leaves.",
            "revival_moments": ["Safavid court", "Victorian parlours"],
        },
        "contemporary_relevance": {
            "summary": "It reads as quietly authoritative.",
            "why_it_resonates_now": "Heritage craft is a luxury again.",
        },
    }


@pytest.fixture
def sample_text(sample_analysis):
    return json.dumps(sample_analysis)
