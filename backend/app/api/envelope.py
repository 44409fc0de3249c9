"""Serialization of response envelopes."""

from fastapi.responses import JSONResponse

from app.models import ResponseEnvelope


def envelope_response(envelope: ResponseEnvelope) -> JSONResponse:
    """Render an envelope as JSON; the outcome travels in the body's ``status``."""
    return JSONResponse(content=envelope.model_dump(mode="json", by_alias=True))
