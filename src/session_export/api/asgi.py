"""ASGI entrypoint for the session export API."""

from session_export.api.app import create_app
from session_export.containers import build_container

app = create_app(build_container())
