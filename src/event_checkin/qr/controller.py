from __future__ import annotations

from flask import Flask, send_from_directory

from .storage import LOCAL_ROUTE_PREFIX, LocalDiskImageStorage


def register(app: Flask, storage: LocalDiskImageStorage) -> None:
    """Serve locally stored QR images. Only wired when QR_STORAGE=local."""

    @app.route(f"{LOCAL_ROUTE_PREFIX}/<path:filename>", methods=["GET"], endpoint="qr_image")
    def qr_image(filename: str):
        return send_from_directory(storage.directory.resolve(), filename, mimetype="image/png")
