"""
Description:
Routes for transcribing spoken interview answers.

- POST /api/transcriptions accepts {"data": BASE64_AUDIO} and returns {"text": ...}.
- The websocket at /api/ws/transcription?token=ID_TOKEN accepts messages of the form
  {"type": "audio", "data": BASE64_AUDIO} and replies with
  {"type": "transcript", "content": ...}, or {"type": "error", "message": ...}
  when a message cannot be processed. Connections without a valid Firebase
  ID token are closed with code 1008.

Dependencies:
- fastapi: For REST and WebSocket routing.
- mock_interview.services.transcription.transcriber: For transcribing base64 audio data.
- loguru: For logging connection events and failures.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Request, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool
from loguru import logger
from mock_interview.core.route_limiters import limiter
from mock_interview.errors.exceptions import BadRequest, InternalServerError, ServiceUnavailable, ModelUnavailableError
from mock_interview.schemas.transcription import TranscriptionRequest, TranscriptionResponse
from mock_interview.services.auth.firebase_auth import get_current_user_uid, get_websocket_user_uid
from mock_interview.services.transcription.transcriber import TranscriberService, get_transcriber

router = APIRouter(
    prefix="/api",
    tags=["transcription"],
    responses={404: {"description": "Not found"}}
)

@router.post("/transcriptions", response_model=TranscriptionResponse)
@limiter.limit("20/minute")
async def transcribe_route(
    request: Request,
    transcription_request: TranscriptionRequest,
    current_uid: str = Depends(get_current_user_uid),
    transcriber: TranscriberService = Depends(get_transcriber)
):
    """Transcribe one recorded answer. Invalid or empty audio data returns 400."""
    try:
        text = await run_in_threadpool(transcriber.transcribe_base64_audio, transcription_request.data)
        return TranscriptionResponse(text=text)
    except ValueError as e:
        raise BadRequest(str(e)) from e
    except ModelUnavailableError as e:
        raise ServiceUnavailable(str(e)) from e
    except Exception as e:
        logger.exception("Unhandled exception in transcription endpoint")
        raise InternalServerError("An unexpected error occurred while transcribing the audio.") from e

@router.websocket("/ws/transcription")
async def transcription_websocket(
    websocket: WebSocket,
    current_uid: Optional[str] = Depends(get_websocket_user_uid),
    transcriber: TranscriberService = Depends(get_transcriber)
):
    if not current_uid:
        logger.warning("Rejected transcription websocket without a valid token")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info(f"WebSocket connected for transcription: {current_uid}")

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"type": "error", "message": "Invalid JSON message"})
                continue

            if not isinstance(message, dict) or message.get("type") != "audio":
                await websocket.send_json({
                    "type": "error",
                    "message": "Unsupported message type"
                })
                continue

            base64_data = message.get("data")
            if not base64_data:
                await websocket.send_json({
                    "type": "error",
                    "message": "Missing 'data' field"
                })
                continue

            try:
                transcript = await run_in_threadpool(transcriber.transcribe_base64_audio, base64_data)
            except (ValueError, ModelUnavailableError) as e:
                await websocket.send_json({"type": "error", "message": str(e)})
                continue
            except Exception as e:
                logger.error(f"Processing error: {e}")
                await websocket.send_json({
                    "type": "error",
                    "message": "An error occurred while processing the audio"
                })
                continue

            await websocket.send_json({
                "type": "transcript",
                "content": transcript
            })
    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")
