"""ASGI entrypoint for the doodle-mail API."""

from doodle_mail.api.app import create_app
from doodle_mail.containers import build_container

app = create_app(build_container())
