"""Compiler for game-configuration files (`GAME name [ ... ]`) to JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from lark.exceptions import (
    UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError,
)

from .codegen import generate
from .errors import ConfigError
from .grammar import GAME_PARSER
from .nodes import GameNode
from .transformer import ConfigTransformer

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigError",
    "compile_config",
    "compile_config_json",
    "is_config_source",
    "parse_config",
    "write_config",
]


def is_config_source(source: str) -> bool:
    """True when the first word after any leading comments is GAME."""
    for line in source.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(('//', '#')):
            continue
        return stripped.split(None, 1)[0] == "GAME"
    return False


def describe_unexpected(e: UnexpectedInput) -> str:
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return "unexpected end of input"
        return f"unexpected {str(e.token)!r}"
    if isinstance(e, UnexpectedCharacters):
        return f"unexpected character {e.char!r}"
    return "unexpected end of input"


def parse_config(source: str) -> GameNode:
    try:
        tree = GAME_PARSER.parse(source)
    except UnexpectedInput as e:
        line = e.line if isinstance(e.line, int) and e.line > 0 else None
        column = e.column if isinstance(e.column, int) and e.column > 0 else None
        raise ConfigError(describe_unexpected(e), line, column) from e
    try:
        return ConfigTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ConfigError):
            raise e.orig_exc from None
        raise


def compile_config(source: str) -> Dict[str, Any]:
    game = parse_config(source)
    logger.debug("compiled game %r with %d section(s)", game.name, len(game.sections))
    return generate(game)


def compile_config_json(source: str) -> str:
    return json.dumps(compile_config(source), indent=2)


def write_config(source: str, path: Union[str, Path], output_dir: Union[str, Path, None] = None) -> Path:
    """Compile `source` (read from `path`) and write `<stem>_config.json`.

    The file lands in `output_dir`, or next to `path` when it is omitted.
    Returns the written path.
    """
    path = Path(path)
    out_dir = Path(output_dir) if output_dir is not None else path.parent
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / f"{path.stem}_config.json"
    target.write_text(compile_config_json(source) + "\n", encoding="utf-8")
    logger.debug("wrote %s", target)
    return target
