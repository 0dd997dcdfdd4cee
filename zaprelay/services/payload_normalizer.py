"""Normalize inbound gateway webhook payloads.

Gateway payloads are not versioned: the sender, the text and the owner of a
message live under different keys depending on the gateway release. Every
field is described by an ordered tuple of JSON paths; the first path that
yields a non-empty value wins. Supporting a new payload shape means adding a
path to one of the tables below.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from zaprelay.services.errors import MissingSenderError

JsonPath = tuple[str, ...]

SENDER_PATHS: tuple[JsonPath, ...] = (
    ("message", "chatid"),
    ("message", "sender"),
    ("chat", "wa_chatid"),
    ("from",),
    ("message", "key", "remoteJid"),
    ("message", "sender_pn"),
)

TEXT_PATHS: tuple[JsonPath, ...] = (
    ("message", "text"),
    ("message", "content"),
    ("text",),
    ("body",),
    ("message", "message", "conversation"),
    ("message", "extendedTextMessage", "text"),
    ("message", "imageMessage", "caption"),
)

FROM_ME_PATHS: tuple[JsonPath, ...] = (
    ("message", "fromMe"),
    ("message", "key", "fromMe"),
)

OWNER_PATHS: tuple[JsonPath, ...] = (("message", "owner"),)

# Used when no explicit owner is present: leading segment of the chat id
OWNER_FALLBACK_PATHS: tuple[JsonPath, ...] = (
    ("message", "chatid"),
    ("message", "sender"),
)

_SUFFIX_RE = re.compile(r"[@:].*", re.DOTALL)
_NON_DIGIT_RE = re.compile(r"\D")


@dataclass(frozen=True)
class NormalizedMessage:
    raw_sender: str
    sender_number: str
    text: str
    from_me: bool
    owner: Optional[str]


def resolve_path(payload: Any, path: JsonPath) -> Any:
    node = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _as_identifier(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def first_identifier(payload: Any, paths: tuple[JsonPath, ...]) -> Optional[str]:
    for path in paths:
        value = _as_identifier(resolve_path(payload, path))
        if value:
            return value
    return None


def first_text(payload: Any, paths: tuple[JsonPath, ...]) -> str:
    for path in paths:
        value = _as_text(resolve_path(payload, path))
        if value:
            return value
    return ""


def normalize_number(value: Optional[str]) -> str:
    """Strip ``@domain`` / ``:device`` suffixes and every non-digit character.

    >>> normalize_number("5511999:12@s.whatsapp.net")
    '5511999'
    """
    if not value:
        return ""
    return _NON_DIGIT_RE.sub("", _SUFFIX_RE.sub("", str(value)))


def extract_from_me(payload: Any) -> bool:
    return any(resolve_path(payload, path) is True for path in FROM_ME_PATHS)


def extract_owner(payload: Any) -> Optional[str]:
    owner = first_identifier(payload, OWNER_PATHS)
    if owner:
        return owner
    fallback = first_identifier(payload, OWNER_FALLBACK_PATHS)
    if fallback:
        return fallback.split("@", 1)[0] or None
    return None


def normalize_payload(payload: Any) -> NormalizedMessage:
    """Build a NormalizedMessage; raises MissingSenderError when no sender is identifiable."""
    raw_sender = first_identifier(payload, SENDER_PATHS)
    if not raw_sender:
        raise MissingSenderError()

    sender_number = normalize_number(raw_sender)
    if not sender_number:
        raise MissingSenderError()

    return NormalizedMessage(
        raw_sender=raw_sender,
        sender_number=sender_number,
        text=first_text(payload, TEXT_PATHS),
        from_me=extract_from_me(payload),
        owner=extract_owner(payload),
    )
