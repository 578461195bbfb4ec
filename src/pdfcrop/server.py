from __future__ import annotations

import logging
from urllib.parse import quote

from pdfcrop import config

import logfire
logfire.configure(
    service_name="pdfcrop-server",
    environment=config.ENVIRONMENT,
    send_to_logfire="if-token-present",
)
logging.basicConfig(level=logging.INFO, handlers=[logfire.LogfireLoggingHandler()])

from fastapi import FastAPI, HTTPException, UploadFile
from fastapi.responses import Response

from pdfcrop import artifacts
from pdfcrop.errors import ArtifactRevoked
from pdfcrop.models import RangeUpdate, SessionResponse, SourceFile
from pdfcrop.session import CropSession
from pdfcrop.store import SessionStore

app = FastAPI(title="pdfcrop", description="Extract a page range from a PDF")
logfire.instrument_fastapi(app)

store = SessionStore()


def _get_session(session_id: str) -> CropSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _respond(session_id: str, session: CropSession) -> SessionResponse:
    artifact = session.artifact
    return SessionResponse(
        session_id=session_id,
        download_path=f"/artifacts/{artifact.token}" if artifact is not None else None,
        **session.snapshot().model_dump(),
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return {"status": "ok", "sessions": len(store), "artifacts": artifacts.live_count()}


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------
@app.post("/sessions", response_model=SessionResponse)
async def create_session():
    session_id, session = store.create()
    return _respond(session_id, session)


@app.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    return _respond(session_id, _get_session(session_id))


@app.post("/sessions/{session_id}/file", response_model=SessionResponse)
async def upload_file(session_id: str, file: UploadFile):
    """Select a file for the session and load its page count."""
    session = _get_session(session_id)
    source = SourceFile(
        data=await file.read(),
        media_type=file.content_type or "",
        name=file.filename or "",
    )
    await session.select_file(source)
    return _respond(session_id, session)


@app.put("/sessions/{session_id}/range", response_model=SessionResponse)
async def update_range(session_id: str, body: RangeUpdate):
    session = _get_session(session_id)
    session.edit_range(start=body.start, end=body.end)
    return _respond(session_id, session)


@app.post("/sessions/{session_id}/extract", response_model=SessionResponse)
async def extract(session_id: str):
    """Cut the selected range. A busy or invalid session is returned unchanged."""
    session = _get_session(session_id)
    await session.extract()
    return _respond(session_id, session)


@app.post("/sessions/{session_id}/reset", response_model=SessionResponse)
async def reset(session_id: str):
    session = _get_session(session_id)
    session.reset()
    return _respond(session_id, session)


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    if not store.remove(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "deleted"}


# ---------------------------------------------------------------------------
# Downloads
# ---------------------------------------------------------------------------
@app.get("/artifacts/{token}")
async def download(token: str):
    try:
        artifact = artifacts.resolve(token)
    except ArtifactRevoked:
        raise HTTPException(status_code=404, detail="Artifact not found or revoked")
    return Response(
        content=artifact.data,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(artifact.file_name)}"},
    )


def main():
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
