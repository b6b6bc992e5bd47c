"""FastAPI web service for Markdown to Slim conversion.

Endpoints::

    POST /convert       Upload a .md file and receive .slim back.
    POST /convert/text  Send raw Markdown text, receive Slim text.
    GET  /health        Health check.
    GET  /profiles      List output profiles and attribute wrappers.

Run::

    uvicorn slimfilter.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from slimfilter import __version__
from slimfilter.converter import Converter

app = FastAPI(
    title="slimfilter",
    description="Markdown to Slim conversion service",
    version=__version__,
)

SLIM_MEDIA_TYPE = "text/x-slim"


def _content_disposition(filename: str) -> str:
    """Build Content-Disposition header, RFC 5987 for non-ASCII names."""
    try:
        filename.encode("ascii")
        return f'attachment; filename="{filename}"'
    except UnicodeEncodeError:
        encoded = quote(filename)
        return f"attachment; filename*=UTF-8''{encoded}"


def _make_converter(profile: str, wrapper: str) -> Converter:
    try:
        return Converter(profile=profile, attributes_wrapper=wrapper)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/profiles")
async def list_profiles() -> dict[str, list[str]]:
    """List output profiles and attribute wrappers."""
    return {"profiles": Converter.PROFILES, "wrappers": Converter.WRAPPERS}


@app.post("/convert")
async def convert_file(
    file: UploadFile = File(...),
    profile: str = Form("plain"),
    wrapper: str = Form("none"),
    encoding: str = Form("utf-8"),
) -> Response:
    """Upload a Markdown file and receive Slim back.

    - **file**: Markdown file (.md)
    - **profile**: Output profile name (plain, html, xhtml, xml, line)
    - **wrapper**: Attribute wrapper (none, round, square, curly)
    - **encoding**: Source file encoding
    """
    converter = _make_converter(profile, wrapper)
    raw = await file.read()
    slim_text = converter.convert_text(raw.decode(encoding))

    filename = (file.filename or "document.md").rsplit(".", 1)[0] + ".slim"

    return Response(
        content=slim_text,
        media_type=SLIM_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.post("/convert/text")
async def convert_text(
    markdown: str = Form(...),
    profile: str = Form("plain"),
    wrapper: str = Form("none"),
) -> Response:
    """Send raw Markdown text and receive Slim text.

    - **markdown**: Markdown source text
    - **profile**: Output profile name
    - **wrapper**: Attribute wrapper
    """
    converter = _make_converter(profile, wrapper)
    return Response(content=converter.convert_text(markdown), media_type=SLIM_MEDIA_TYPE)
