"""
Identity resolution for user lookups.

A user can be addressed by id, username or email. Endpoints that accept
several optional keys turn them into a single LookupKey here, so the choice
of query is made in one place and in the same order everywhere:

- no key              -> InvalidRequestError (before any store access)
- one key             -> single-field lookup
- username + email    -> both must match the same record
- id + username       -> both must match the same record
- anything else       -> InvalidRequestError
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from bson import ObjectId

from app.core.exceptions import InvalidRequestError

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
_OBJECT_ID_RE = re.compile(OBJECT_ID_PATTERN)


class LookupKind(str, Enum):
    BY_ID = "by_id"
    BY_USERNAME = "by_username"
    BY_EMAIL = "by_email"
    BY_USERNAME_AND_EMAIL = "by_username_and_email"
    BY_ID_AND_USERNAME = "by_id_and_username"


@dataclass(frozen=True)
class LookupKey:
    kind: LookupKind
    id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def by_id(cls, user_id: str) -> "LookupKey":
        return cls(LookupKind.BY_ID, id=user_id)

    @classmethod
    def by_username(cls, username: str) -> "LookupKey":
        return cls(LookupKind.BY_USERNAME, username=username)

    @classmethod
    def by_email(cls, email: str) -> "LookupKey":
        return cls(LookupKind.BY_EMAIL, email=email)

    def to_filter(self) -> Optional[Dict[str, Any]]:
        """
        Render the key as a Mongo filter.

        Returns None when the key carries an id that is not a valid
        ObjectId: such a key can never match a stored document.
        """
        query: Dict[str, Any] = {}

        if self.kind in (LookupKind.BY_ID, LookupKind.BY_ID_AND_USERNAME):
            object_id = to_object_id(self.id)
            if object_id is None:
                return None
            query["_id"] = object_id

        if self.kind in (
            LookupKind.BY_USERNAME,
            LookupKind.BY_USERNAME_AND_EMAIL,
            LookupKind.BY_ID_AND_USERNAME,
        ):
            query["Username"] = self.username

        if self.kind in (LookupKind.BY_EMAIL, LookupKind.BY_USERNAME_AND_EMAIL):
            query["Email"] = self.email

        return query


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def resolve_lookup_key(
    id: Optional[str] = None,
    username: Optional[str] = None,
    email: Optional[str] = None,
) -> LookupKey:
    """Select the lookup key variant from whichever parameters are present."""
    has_id, has_username, has_email = _present(id), _present(username), _present(email)

    if not (has_id or has_username or has_email):
        raise InvalidRequestError("At least one of id, username or email must be provided")

    if has_id and not has_username and not has_email:
        return LookupKey.by_id(id)
    if has_username and not has_id and not has_email:
        return LookupKey.by_username(username)
    if has_email and not has_id and not has_username:
        return LookupKey.by_email(email)
    if has_username and has_email and not has_id:
        return LookupKey(LookupKind.BY_USERNAME_AND_EMAIL, username=username, email=email)
    if has_id and has_username and not has_email:
        return LookupKey(LookupKind.BY_ID_AND_USERNAME, id=id, username=username)

    raise InvalidRequestError(
        "Unsupported key combination: use username and email, or id and username"
    )


def is_object_id(value: str) -> bool:
    return bool(_OBJECT_ID_RE.match(value or ""))


def to_object_id(value: Optional[str]) -> Optional[ObjectId]:
    if value is None or not is_object_id(value):
        return None
    return ObjectId(value)


def key_from_identifier(identifier: str, allow_email: bool = True) -> LookupKey:
    """
    Classify a single path segment.

    A 24-char hex string is always an id, even if a username happens to look
    like one. With ``allow_email`` a segment containing '@' is an email.
    """
    if is_object_id(identifier):
        return LookupKey.by_id(identifier)
    if allow_email and "@" in identifier:
        return LookupKey.by_email(identifier)
    return LookupKey.by_username(identifier)
