"""ASGI entrypoint for the QUID label API."""

from quid_label.api.app import create_app
from quid_label.containers import build_container

app = create_app(build_container())
