"""
Description:
This module transcribes spoken interview answers, received as base64 encoded
WebM/Opus audio, using the Faster Whisper model.

Dependencies:
- faster-whisper: For audio transcription.
- tempfile: For creating temporary files.
- base64: For decoding base64 audio data.
"""
from faster_whisper import WhisperModel
import binascii
import tempfile
import base64
import threading
from loguru import logger
from mock_interview.errors.exceptions import ModelUnavailableError
import os

_model = None
_model_lock = threading.Lock()

class TranscriberService:
    def get_model(self):
        """
        Initializes and returns the WhisperModel instance.
        The model is loaded once per process, on the first transcription.

        Returns:
            WhisperModel: An instance of the WhisperModel configured for transcription.
        """
        global _model
        if _model is None:
            with _model_lock:
                if _model is None:
                    logger.info("Loading Whisper model base.en")
                    try:
                        _model = WhisperModel("base.en", device="cpu", compute_type="int8", num_workers=1, cpu_threads=4)
                    except Exception as e:
                        logger.error(f"Failed to load Whisper model: {e}")
                        raise ModelUnavailableError("Speech-to-text model is unavailable") from e
        return _model

    def transcribe_base64_audio(self, base64_data: str) -> str:
        """
        Transcribes base64 encoded audio data (WebM/Opus format) to text.

        Args:
            base64_data (str): Base64 encoded audio data in WebM/Opus format

        Returns:
            str: Transcribed text from the audio

        Raises:
            ValueError: If the data is empty or not valid base64
            ModelUnavailableError: If the Whisper model cannot be loaded
        """
        try:
            audio_bytes = base64.b64decode(base64_data, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise ValueError("Audio data is not valid base64") from e
        if not audio_bytes:
            raise ValueError("Audio data is empty")
        logger.debug(f"Decoded audio data, size: {len(audio_bytes)} bytes")

        # Use .webm extension for WebM/Opus format
        with tempfile.NamedTemporaryFile(delete=False, suffix=".webm") as temp_audio:
            temp_audio.write(audio_bytes)
            temp_path = temp_audio.name

        try:
            segments, _ = self.get_model().transcribe(
                temp_path,
                beam_size=7,
                best_of=1,
                temperature=0,
                vad_filter=True,
                word_timestamps=False,
                condition_on_previous_text=False
            )
            return " ".join(seg.text.strip() for seg in segments).strip()
        except Exception as e:
            logger.error(f"Error transcribing audio: {str(e)}")
            raise
        finally:
            try:
                os.unlink(temp_path)
                logger.debug(f"Cleaned up temporary file: {temp_path}")
            except OSError as e:
                logger.warning(f"Error removing temporary file {temp_path}: {str(e)}")

transcriber_service = TranscriberService()

def get_transcriber() -> TranscriberService:
    """FastAPI dependency returning the process-wide transcriber."""
    return transcriber_service
