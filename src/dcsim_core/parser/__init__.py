# src/dcsim_core/parser/__init__.py
from .exceptions import ParsingError, SchemaValidationError
from .text_format import (
    EXAMPLE_CIRCUIT_TEXT,
    CircuitTextParser,
    ParsedCircuit,
    generate_circuit_text,
    parse_circuit_text,
)
from .document import (
    CircuitDocumentLoader,
    LoadedCircuit,
    dump_circuit_document,
    load_circuit_document,
    save_circuit_document,
)

__all__ = [
    "ParsingError",
    "SchemaValidationError",
    "EXAMPLE_CIRCUIT_TEXT",
    "CircuitTextParser",
    "ParsedCircuit",
    "generate_circuit_text",
    "parse_circuit_text",
    "CircuitDocumentLoader",
    "LoadedCircuit",
    "dump_circuit_document",
    "load_circuit_document",
    "save_circuit_document",
]
