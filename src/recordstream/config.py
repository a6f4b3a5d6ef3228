"""
Configuration for transparent file access.

Charset errors come in two kinds, each with its own action:

- malformed input: bytes that are not a valid sequence in the charset when
  decoding, or lone surrogates when encoding;
- unmappable characters: valid data with no counterpart in the other side,
  such as ``é`` written as ASCII or byte 0x81 read as cp1252.

Both actions apply to readers and writers alike.
"""

import codecs
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union


class CodingErrorAction(Enum):
    """How to handle malformed or unmappable character data."""
    REPLACE = "replace"
    IGNORE = "ignore"
    REPORT = "report"

    @property
    def errors_handler(self) -> str:
        """Name of the built-in codec error handler implementing this action."""
        if self is CodingErrorAction.REPORT:
            return "strict"
        return self.value


def _is_malformed(exc: Union[UnicodeDecodeError, UnicodeEncodeError]) -> bool:
    if isinstance(exc, UnicodeEncodeError):
        return "\ud800" <= exc.object[exc.start] <= "\udfff"
    return "maps to <undefined>" not in exc.reason


def _make_handler(malformed: CodingErrorAction, unmappable: CodingErrorAction):
    """Codec error handler choosing the action by the kind of error."""

    def handle(exc: UnicodeError) -> Tuple[str, int]:
        if not isinstance(exc, (UnicodeDecodeError, UnicodeEncodeError)):
            raise exc
        action = malformed if _is_malformed(exc) else unmappable
        if action is CodingErrorAction.REPORT:
            raise exc
        if isinstance(exc, UnicodeDecodeError):
            replacement = "\ufffd" if action is CodingErrorAction.REPLACE else ""
            return replacement, exc.end
        # One character at a time: the rest of the range may be of the other kind
        replacement = "?" if action is CodingErrorAction.REPLACE else ""
        return replacement, exc.start + 1

    return handle


def _handler_name(malformed: CodingErrorAction, unmappable: CodingErrorAction) -> str:
    return f"recordstream.{malformed.value}-{unmappable.value}"


for _malformed in CodingErrorAction:
    for _unmappable in CodingErrorAction:
        codecs.register_error(_handler_name(_malformed, _unmappable),
                              _make_handler(_malformed, _unmappable))


@dataclass(frozen=True)
class FileConfig:
    """Settings threaded through every file-open call."""

    # Charset error policy
    malformed_input_action: CodingErrorAction = CodingErrorAction.REPLACE
    unmappable_character_action: CodingErrorAction = CodingErrorAction.REPLACE

    default_encoding: str = "utf-8"

    # Warn when a whole-file read exceeds this fraction of available memory
    memory_threshold: float = 0.8

    def __post_init__(self):
        # Accept the enum values as plain strings, e.g. "ignore"
        for name in ("malformed_input_action", "unmappable_character_action"):
            value = getattr(self, name)
            if not isinstance(value, CodingErrorAction):
                object.__setattr__(self, name, CodingErrorAction(value))

    @property
    def errors(self) -> str:
        """
        Codec error handler name for text streams, reading or writing.

        When both actions agree the built-in handler is used.
        """
        if self.malformed_input_action is self.unmappable_character_action:
            return self.malformed_input_action.errors_handler
        return _handler_name(self.malformed_input_action, self.unmappable_character_action)

    def with_actions(self,
                     malformed_input: Optional[CodingErrorAction] = None,
                     unmappable_character: Optional[CodingErrorAction] = None) -> 'FileConfig':
        """Return a copy with the given coding error actions replaced."""
        changes = {}
        if malformed_input is not None:
            changes["malformed_input_action"] = malformed_input
        if unmappable_character is not None:
            changes["unmappable_character_action"] = unmappable_character
        return replace(self, **changes)


DEFAULT_CONFIG = FileConfig()


def resolve(config: Optional[FileConfig]) -> FileConfig:
    """Return ``config``, or the default configuration when it is None."""
    return DEFAULT_CONFIG if config is None else config
