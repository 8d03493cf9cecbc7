"""Strongly typed identifiers for toplist domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

ServerId = NewType("ServerId", UUID)
VoteId = NewType("VoteId", UUID)
