"""Allow ``python -m multivm``."""

from .cli import run

run()
