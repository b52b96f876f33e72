"""Messages exchanged with sqlc over the plugin protocol."""

from dataclasses import dataclass, field
from typing import Any, Protocol

from sqlc_gen_core.models import Catalog


@dataclass
class Settings:
    """Plugin settings taken from the sqlc configuration."""
    version: str = ""
    engine: str = ""
    schema: list[str] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)


@dataclass
class GenerateRequest:
    """Code generation request sent by sqlc.

    ``queries`` is passed through to the generator untouched.
    """
    settings: Settings | None = None
    catalog: Catalog | None = None
    queries: list[Any] = field(default_factory=list)
    sqlc_version: str = ""
    plugin_options: bytes = b""
    global_options: bytes = b""


@dataclass
class File:
    """Generated output file."""
    name: str
    contents: bytes = b""


@dataclass
class GenerateResponse:
    """Files produced by a generator."""
    files: list[File] = field(default_factory=list)


class Codec(Protocol):
    """Wire encoding of plugin messages."""

    def decode_request(self, data: bytes) -> GenerateRequest: ...

    def encode_response(self, response: GenerateResponse) -> bytes: ...
