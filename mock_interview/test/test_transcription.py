"""
Test Transcription

Tests the transcription REST route and websocket with the Whisper model
replaced by a fake, plus input handling of the transcriber itself.

Dependencies:
- pytest: For testing framework
- fastapi.testclient: For calling the routes
"""

import base64
import os
import pytest
from starlette.websockets import WebSocketDisconnect
from mock_interview.main import app
from mock_interview.errors.exceptions import ModelUnavailableError
from mock_interview.services.auth import firebase_auth
from mock_interview.services.transcription import transcriber as transcriber_module
from mock_interview.services.transcription.transcriber import TranscriberService, get_transcriber
from mock_interview.services.auth.firebase_auth import get_websocket_user_uid

AUDIO = base64.b64encode(b"\x1aE\xdf\xa3 fake webm bytes").decode()


class FakeTranscriber:
    def __init__(self, text="I would use a hash map."):
        self.text = text
        self.calls = []

    def transcribe_base64_audio(self, base64_data):
        self.calls.append(base64_data)
        if base64_data == "broken":
            raise ValueError("Audio data is not valid base64")
        if base64_data == "no-model":
            raise ModelUnavailableError("Speech-to-text model is unavailable")
        return self.text


@pytest.fixture
def fake_transcriber(client):
    fake = FakeTranscriber()
    app.dependency_overrides[get_transcriber] = lambda: fake
    return fake


class TestTranscriptionRoute:
    def test_transcribes_audio(self, client, fake_transcriber):
        response = client.post("/api/transcriptions", json={"data": AUDIO})

        assert response.status_code == 200
        assert response.json() == {"text": "I would use a hash map."}
        assert fake_transcriber.calls == [AUDIO]

    def test_invalid_audio(self, client, fake_transcriber):
        response = client.post("/api/transcriptions", json={"data": "broken"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Audio data is not valid base64"}

    def test_model_unavailable(self, client, fake_transcriber):
        response = client.post("/api/transcriptions", json={"data": "no-model"})

        assert response.status_code == 503
        assert response.json() == {"detail": "Speech-to-text model is unavailable"}

    def test_missing_data(self, client, fake_transcriber):
        assert client.post("/api/transcriptions", json={}).status_code == 422


class TestTranscriptionWebSocket:
    def test_transcript_message(self, client, fake_transcriber):
        with client.websocket_connect("/api/ws/transcription") as websocket:
            websocket.send_json({"type": "audio", "data": AUDIO})
            assert websocket.receive_json() == {"type": "transcript", "content": "I would use a hash map."}

    def test_error_messages_keep_the_connection_open(self, client, fake_transcriber):
        with client.websocket_connect("/api/ws/transcription") as websocket:
            websocket.send_json({"type": "video", "data": AUDIO})
            assert websocket.receive_json() == {"type": "error", "message": "Unsupported message type"}

            websocket.send_json({"type": "audio"})
            assert websocket.receive_json() == {"type": "error", "message": "Missing 'data' field"}

            websocket.send_json({"type": "audio", "data": "broken"})
            assert websocket.receive_json() == {"type": "error", "message": "Audio data is not valid base64"}

            websocket.send_text("not json")
            assert websocket.receive_json() == {"type": "error", "message": "Invalid JSON message"}

            websocket.send_json({"type": "audio", "data": AUDIO})
            assert websocket.receive_json()["type"] == "transcript"


class TestTranscriptionWebSocketAuth:
    """The websocket verifies the real token, so the conftest override is removed."""

    @pytest.fixture
    def verified_tokens(self, client, monkeypatch):
        app.dependency_overrides.pop(get_websocket_user_uid, None)
        tokens = []

        def fake_verify(token):
            tokens.append(token)
            return ({"uid": "user-1"}, "user-1") if token == "good-token" else (None, None)

        monkeypatch.setattr(firebase_auth, "verify_id_token", fake_verify)
        return tokens

    def test_missing_token_is_rejected(self, client, verified_tokens, fake_transcriber):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/api/ws/transcription"):
                pass
        assert exc_info.value.code == 1008
        assert verified_tokens == []
        assert fake_transcriber.calls == []

    def test_invalid_token_is_rejected(self, client, verified_tokens, fake_transcriber):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/api/ws/transcription?token=bad-token"):
                pass
        assert exc_info.value.code == 1008
        assert verified_tokens == ["bad-token"]

    def test_valid_token_is_accepted(self, client, verified_tokens, fake_transcriber):
        with client.websocket_connect("/api/ws/transcription?token=good-token") as websocket:
            websocket.send_json({"type": "audio", "data": AUDIO})
            assert websocket.receive_json() == {"type": "transcript", "content": "I would use a hash map."}


class FakeSegment:
    def __init__(self, text):
        self.text = text


class FakeWhisperModel:
    def __init__(self):
        self.paths = []

    def transcribe(self, path, **kwargs):
        self.paths.append(path)
        assert os.path.exists(path)
        return iter([FakeSegment(" Hello"), FakeSegment(" world. ")]), None


class TestTranscriberService:
    def test_joins_segments_and_removes_temp_file(self, monkeypatch):
        model = FakeWhisperModel()
        monkeypatch.setattr(transcriber_module, "_model", model)

        text = TranscriberService().transcribe_base64_audio(AUDIO)

        assert text == "Hello world."
        assert model.paths[0].endswith(".webm")
        assert not os.path.exists(model.paths[0])

    @pytest.mark.parametrize("data", ["not base64!!", ""])
    def test_rejects_invalid_audio(self, monkeypatch, data):
        monkeypatch.setattr(transcriber_module, "_model", FakeWhisperModel())

        with pytest.raises(ValueError):
            TranscriberService().transcribe_base64_audio(data)
