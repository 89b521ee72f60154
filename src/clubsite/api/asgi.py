"""ASGI entrypoint for the club site API."""

from clubsite.api.app import create_app
from clubsite.containers import build_container

app = create_app(build_container())
