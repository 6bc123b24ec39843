# -*- coding: utf-8 -*-
"""HTTP front end: an info page at ``/`` and raw body uploads at ``/upload``."""

import ipaddress
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fs.errors import CreateFailed
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from .__meta__ import __version__
from .exceptions import StagingError, UploadError
from .hashdrop import HashDrop
from .log import setup_logging
from .settings import Settings


logger = logging.getLogger(__name__)

INFO = """\
hashdrop {version}

Upload a file by POSTing its raw bytes:

    curl --data-binary @photo.png {upload_url}

The response is the URL the file can be fetched from, under {base_url}.
Files are named after the shortest unused prefix of their SHA-256 hash plus
an extension detected from the content. Unrecognized file types are rejected.
"""


def create_app(settings: Settings) -> FastAPI:
    """Build the application around a store for ``settings.FS_DEST_DIR``."""
    app = FastAPI(title="hashdrop", version=__version__)
    app.state.settings = settings
    app.state.store = HashDrop(str(settings.FS_DEST_DIR),
                               settings.BASE_URL,
                               min_length=settings.MIN_LENGTH)

    if settings.ENFORCE_SUBNET:
        app.middleware("http")(_allow_subnet(settings.ALLOWED_SUBNET))

    @app.get("/", response_class=PlainTextResponse)
    async def root(request: Request):
        return INFO.format(version=__version__,
                           upload_url=request.url_for("upload"),
                           base_url=settings.BASE_URL)

    @app.post("/upload", response_class=PlainTextResponse)
    async def upload(request: Request):
        store = request.app.state.store

        try:
            staged = await run_in_threadpool(store.stage)

            try:
                async for chunk in request.stream():
                    await run_in_threadpool(staged.write, chunk)

                address = await run_in_threadpool(store.commit, staged)
            except ClientDisconnect as exc:
                raise StagingError() from exc
            finally:
                await run_in_threadpool(store.discard, staged)
        except UploadError as exc:
            return _error_response(request, exc)

        logger.info("IP: %s Path: %s Published: %s", _client_host(request),
                    request.url.path, address.name)
        return PlainTextResponse(address.url + "\n")

    return app


def _error_response(request: Request, exc: UploadError) -> PlainTextResponse:
    logger.error("IP: %s Path: %s Error: '%s' - %s", _client_host(request),
                 request.url.path, exc.message, exc.__cause__)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "-"


def _allow_subnet(network):
    """Return middleware that answers 403 to clients outside `network`."""

    async def allow_subnet(request: Request, call_next):
        host = _client_host(request)
        try:
            allowed = ipaddress.ip_address(host) in network
        except ValueError:
            allowed = False

        if not allowed:
            logger.warning("IP: %s Path: %s Error: 'forbidden' - not in %s",
                           host, request.url.path, network)
            return PlainTextResponse("forbidden", status_code=403)

        return await call_next(request)

    return allow_subnet


def main():
    """Console entry point: load settings and serve with uvicorn."""
    import uvicorn

    try:
        settings = Settings()
    except ValidationError as exc:
        sys.exit("invalid configuration, FS_DEST_DIR and BASE_URL are "
                 "required\n" + str(exc))

    setup_logging(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    settings.log_defaults()

    try:
        app = create_app(settings)
    except CreateFailed as exc:
        sys.exit("FS_DEST_DIR is not a usable directory: {0}".format(exc))

    uvicorn.run(app, host=settings.HOST, port=settings.PORT,
                log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
