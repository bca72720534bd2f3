# keyword_typeahead/core/candidates.py
"""
Candidate entries shown in the suggestion list.

A candidate is either a user (the argument of a "from:" keyword) or a topic
(the display-only results of a chip-scoped lookup). Both carry a `kind` tag
and an `identity` used by SelectionState to track the highlight across list
replacements:
 - UserEntry.identity  -> handle
 - TopicEntry.identity -> label

The decoders turn the typeahead service's JSON into entries. The wire shapes
are described with TypedDicts; only the fields we read are listed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Union
from typing_extensions import TypedDict

logger = logging.getLogger(__name__)


class CandidateKind(str, Enum):
    USER = "user"
    TOPIC = "topic"


@dataclass(frozen=True)
class UserEntry:
    handle: str
    display_name: str = ""
    avatar_url: str = ""
    bio: str = ""
    is_verified: bool = False

    @property
    def kind(self) -> CandidateKind:
        return CandidateKind.USER

    @property
    def identity(self) -> str:
        return self.handle


@dataclass(frozen=True)
class TopicEntry:
    label: str

    @property
    def kind(self) -> CandidateKind:
        return CandidateKind.TOPIC

    @property
    def identity(self) -> str:
        return self.label


CandidateEntry = Union[UserEntry, TopicEntry]


# Wire shapes -----------------------------------------------------------------

class RawResultContext(TypedDict, total=False):
    display_string: str


class RawUser(TypedDict, total=False):
    screen_name: str
    name: str
    profile_image_url_https: str
    result_context: RawResultContext
    verified: bool
    ext_is_blue_verified: bool


class RawTopic(TypedDict, total=False):
    topic: str


# Decoding --------------------------------------------------------------------

def decode_user(raw: RawUser) -> UserEntry:
    ctx = raw.get("result_context") or {}
    return UserEntry(
        handle=raw["screen_name"],
        display_name=raw.get("name") or "",
        avatar_url=raw.get("profile_image_url_https") or "",
        bio=ctx.get("display_string") or "",
        is_verified=bool(raw.get("verified") or raw.get("ext_is_blue_verified")),
    )


def decode_users(payload: Dict[str, Any]) -> List[CandidateEntry]:
    """Decode the `users` array of a typeahead response, keeping service order."""
    out: List[CandidateEntry] = []
    for raw in payload.get("users") or []:
        if not raw.get("screen_name"):
            logger.debug("skipping user without screen_name: %r", raw)
            continue
        out.append(decode_user(raw))
    return out


def decode_topics(payload: Dict[str, Any]) -> List[CandidateEntry]:
    """Decode the `topics` array of a typeahead response."""
    out: List[CandidateEntry] = []
    for raw in payload.get("topics") or []:
        label = raw.get("topic")
        if not label:
            logger.debug("skipping topic without label: %r", raw)
            continue
        out.append(TopicEntry(label=label))
    return out


def decode(payload: Dict[str, Any], kind: CandidateKind) -> List[CandidateEntry]:
    if kind is CandidateKind.USER:
        return decode_users(payload)
    if kind is CandidateKind.TOPIC:
        return decode_topics(payload)
    raise ValueError(f"unknown candidate kind: {kind!r}")


def describe(entry: CandidateEntry) -> str:
    """One-line text for a candidate row."""
    if entry.kind is CandidateKind.USER:
        tick = " ✓" if entry.is_verified else ""
        name = entry.display_name or entry.handle
        line = f"{name}{tick} @{entry.handle}"
        return f"{line} - {entry.bio}" if entry.bio else line
    if entry.kind is CandidateKind.TOPIC:
        return entry.label
    raise ValueError(f"unknown candidate kind: {entry.kind!r}")
