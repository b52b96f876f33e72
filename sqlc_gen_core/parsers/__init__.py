"""SQL DDL parsers."""

from sqlc_gen_core.parsers.ddl import DDLParser

__all__ = ["DDLParser"]
