"""Domain value objects for the toplist.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from typing import Iterator

from pydantic import field_validator

from toplist.domain.value.common import RootValueObject, ValueObject


class Slug(RootValueObject[str]):
    """URL-safe slug for server listings.

    Must be lowercase, alphanumeric with hyphens, 1-120 characters.
    Examples: 'runewild', 'roat-pkz-2'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if len(v) < 1 or len(v) > 120:
            raise ValueError("Slug must be 1-120 characters")
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        return v


class VoterIdentity(ValueObject):
    """Who is voting.

    The network address is always known; the account id is present only
    for authenticated requests. Either one alone is enough to match a
    previous vote, so logging out or switching networks does not reset
    the cooldown.
    """

    ip_address: str
    user_id: str | None = None

    @field_validator("ip_address")
    @classmethod
    def validate_ip_address(cls, v: str) -> str:
        """Validate the address is present and fits the column."""
        v = v.strip()
        if len(v) < 1 or len(v) > 64:
            raise ValueError("IP address must be 1-64 characters")
        return v

    @field_validator("user_id")
    @classmethod
    def normalize_user_id(cls, v: str | None) -> str | None:
        """Treat blank account ids as anonymous."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def is_authenticated(self) -> bool:
        """Whether the voter carries an account id."""
        return self.user_id is not None

    def lock_keys(self, server_id: object) -> list[str]:
        """Keys that serialize vote submissions from this identity.

        One key per matching signal, sorted so that concurrent holders
        always acquire them in the same order.
        """
        return sorted(self._iter_lock_keys(str(server_id)))

    def _iter_lock_keys(self, server_id: str) -> Iterator[str]:
        yield f"{server_id}:ip:{self.ip_address}"
        if self.user_id is not None:
            yield f"{server_id}:user:{self.user_id}"
