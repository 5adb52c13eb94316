# src/dcsim_core/circuit_loader.py
import logging
from pathlib import Path
from typing import Union

from .errors import CircuitLoadError, DiagnosableError
from .parser import CircuitDocumentLoader, CircuitTextParser, LoadedCircuit, ParsingError

logger = logging.getLogger(__name__)

#: Suffixes read with the editor's line-oriented text format; anything else is a YAML/JSON document.
TEXT_FORMAT_SUFFIXES = (".txt", ".cir", ".circuit")


def load_circuit(path: Union[str, Path]) -> LoadedCircuit:
    """
    Loads a circuit from a text-format file or a YAML/JSON document.

    This is the user-facing entry point of the loading stage: any diagnosable
    error from the parsers is turned into a `CircuitLoadError` whose message is
    the full diagnostic report.
    """
    source = Path(path)
    logger.info(f"--- Loading circuit from '{source}' ---")
    try:
        if source.suffix.lower() in TEXT_FORMAT_SUFFIXES:
            return _load_text_file(source)
        return CircuitDocumentLoader().load(source)
    except DiagnosableError as e:
        raise CircuitLoadError(e.get_diagnostic_report()) from e


def _load_text_file(source: Path) -> LoadedCircuit:
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        raise ParsingError(details=f"Cannot read circuit file: {e}", file_path=source) from e
    try:
        parsed = CircuitTextParser().parse(text)
    except ParsingError as e:
        raise ParsingError(details=e.details, file_path=source, line=e.line) from e
    return LoadedCircuit(components=parsed.components, wires=parsed.wires)
