"""ASGI entrypoint for the cut tracker API."""

from cut_tracker.api.app import create_app
from cut_tracker.containers import build_container

app = create_app(build_container())
