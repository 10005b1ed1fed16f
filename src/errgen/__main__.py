"""Run the plugin with ``python -m errgen``."""

from errgen.cli import app

app(prog_name="protoc-gen-errors")
