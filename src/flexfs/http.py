# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Serve a backing store over HTTP.

:func:`build_http_app` wraps any :class:`~flexfs.BackingStore` in a small
FastAPI application, so bundled assets can be mounted next to an API::

    app = FastAPI()
    app.mount("/assets", new_embed(files("myapp") / "assets").http_fs())

Directories are served through their ``index.html``; there are no directory
listings. Requires the ``http`` extra.
"""

from __future__ import annotations

import mimetypes

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from ._path import normalize_path
from ._protocol import BackingStore
from ._types import FileStat
from .logging import StructuredLogger, get_logger

__all__ = ["INDEX_FILE", "build_http_app"]

INDEX_FILE = "index.html"


class _StaticHandlers:
    def __init__(self, *, store: BackingStore, logger: StructuredLogger) -> None:
        super().__init__()
        self._store = store
        self._logger = logger

    def serve(self, file_path: str) -> Response:
        """Return the bytes of the file at ``file_path``."""
        try:
            info = self._locate(file_path)
            with self._store.open(info.path) as f:
                content = f.read()
        except PermissionError as error:
            self._logger.debug(
                "Request rejected",
                event="flexfs.http.forbidden",
                context={"path": file_path, "error": str(error)},
            )
            raise HTTPException(status_code=403, detail="Forbidden") from error
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as error:
            self._logger.debug(
                "File not found",
                event="flexfs.http.not_found",
                context={"path": file_path},
            )
            raise HTTPException(
                status_code=404, detail=f"File not found: {file_path}"
            ) from error

        media_type = mimetypes.guess_type(info.name)[0] or "application/octet-stream"
        self._logger.debug(
            "File served",
            event="flexfs.http.served",
            context={"path": info.path, "size_bytes": len(content)},
        )
        return Response(content=content, media_type=media_type)

    def _locate(self, file_path: str) -> FileStat:
        info = self._store.stat(normalize_path(file_path))
        if not info.is_directory:
            return info
        index = self._store.stat(normalize_path(info.path, INDEX_FILE))
        if index.is_directory:
            raise IsADirectoryError(f"Is a directory: {index.path}")
        return index


def build_http_app(
    store: BackingStore, *, logger: StructuredLogger | None = None
) -> FastAPI:
    """Construct a FastAPI application serving ``store`` read-only."""

    resolved_logger = logger or get_logger(__name__, context={"component": "http"})
    handlers = _StaticHandlers(store=store, logger=resolved_logger)

    app = FastAPI(title="flexfs static files", openapi_url=None)
    app.state.store = store
    app.state.logger = resolved_logger

    _ = app.get("/{file_path:path}")(handlers.serve)

    return app
