"""Plugin runtime: decode a request, enrich its catalog, run a generator."""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from sqlc_gen_core.catalog import CatalogBuilder
from sqlc_gen_core.plugin import Codec, GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

Processor = Callable[[GenerateRequest], GenerateResponse]


def read_schema_file(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def enrich_request(
    request: GenerateRequest,
    loader: Callable[[str], str] = read_schema_file,
) -> GenerateRequest:
    """Replace the request's catalog with one built from its schema files.

    Files are parsed in the order listed in ``settings.schema`` and the first
    failure propagates. A catalog already on the request is merged in, with
    tables parsed from the schema files taking precedence. Requests without
    schema files are returned unchanged.
    """
    settings = request.settings
    if settings is None or not settings.schema:
        return request

    builder = CatalogBuilder(settings.engine or "generic")
    for path in settings.schema:
        logger.debug("Parsing schema file %s", path)
        builder.parse(loader(path))

    if request.catalog is not None:
        builder.merge_catalog(request.catalog)

    request.catalog = builder.build()
    return request


def run_with_io(
    reader: BinaryIO,
    writer: BinaryIO,
    process: Processor,
    codec: Codec,
    loader: Callable[[str], str] = read_schema_file,
) -> None:
    """Read a request from ``reader``, process it and write the response.

    Nothing is written if any step fails.
    """
    request = codec.decode_request(reader.read())
    request = enrich_request(request, loader)
    response = process(request)
    writer.write(codec.encode_response(response))
    writer.flush()


def run(process: Processor, codec: Codec) -> None:
    """Run a plugin over stdin and stdout."""
    run_with_io(sys.stdin.buffer, sys.stdout.buffer, process, codec)
