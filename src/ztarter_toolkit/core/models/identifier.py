"""
Module: identifier

Purpose:
    Provides the Identifier value type - the bounded, byte-compared key
    naming the level file a polygon came from. Used as the dedup key of
    the polygon store and as the provenance entry of generated levels.

Key Functions:
    - Identifier.from_text(s): Build from a file name (truncating)
    - Identifier.from_bytes(data): Build from raw bytes (truncating)
    - Identifier.from_format(prefix, pad, number): Numbered level names
    - Identifier.as_text(): Decode to str

Dependencies:
    - dataclasses (std)
    - functools (std)

Used By:
    - core.models.polygon.PolygonRecord
    - extractor.pipeline
    - store.polygon_store, store.persistence
    - builder.assembler, builder.controller

Truncation Policy:
    Names longer than IDENTIFIER_CAPACITY bytes are truncated by default,
    backing off to the nearest UTF-8 character boundary. Distinct long
    names can therefore collide. Pass strict=True to reject them instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import total_ordering

from ..errors import IdentifierOverflowError

logger = logging.getLogger(__name__)

# Sized for 8.3 level file names ("L0000001.lev").
IDENTIFIER_CAPACITY = 12

DEFAULT_LEVEL_SUFFIX = ".lev"


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Identifier:
    """
    Source-file identifier with a fixed byte capacity (immutable).

    Equality, hashing and ordering use the stored bytes only, so two
    identifiers built from the same truncated prefix are equal.

    Attributes:
        raw: UTF-8 bytes, at most IDENTIFIER_CAPACITY long

    Invariants:
        - len(raw) <= IDENTIFIER_CAPACITY
        - raw decodes as UTF-8

    Example:
        >>> Identifier.from_text("abc.lev").as_text()
        'abc.lev'
        >>> len(Identifier.from_text("a_very_long_name.lev"))
        12
    """

    raw: bytes

    def __post_init__(self) -> None:
        """Validate identifier on construction."""
        if len(self.raw) > IDENTIFIER_CAPACITY:
            raise IdentifierOverflowError(
                f"Identifier exceeds {IDENTIFIER_CAPACITY} bytes: {self.raw!r}"
            )
        try:
            self.raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"Identifier is not valid UTF-8: {self.raw!r}") from e

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_text(cls, text: str, *, strict: bool = False) -> Identifier:
        """
        Create an identifier from a file name.

        Args:
            text: Source name, usually a level file name with extension
            strict: Raise instead of truncating when text is too long

        Returns:
            Identifier holding at most IDENTIFIER_CAPACITY bytes of text

        Raises:
            IdentifierOverflowError: If strict and text exceeds capacity
        """
        return cls.from_bytes(text.encode("utf-8"), strict=strict)

    @classmethod
    def from_bytes(cls, data: bytes, *, strict: bool = False) -> Identifier:
        """
        Create an identifier from UTF-8 bytes, applying the truncation policy.

        Args:
            data: UTF-8 encoded name
            strict: Raise instead of truncating when data is too long

        Returns:
            Identifier instance

        Raises:
            IdentifierOverflowError: If strict and data exceeds capacity
            ValueError: If data is not valid UTF-8
        """
        if len(data) <= IDENTIFIER_CAPACITY:
            return cls(bytes(data))

        if strict:
            raise IdentifierOverflowError(
                f"Identifier exceeds {IDENTIFIER_CAPACITY} bytes: {data!r}"
            )

        cut = IDENTIFIER_CAPACITY
        # Never split a multi-byte character: continuation bytes are 0b10xxxxxx
        while cut > 0 and (data[cut] & 0xC0) == 0x80:
            cut -= 1
        truncated = bytes(data[:cut])
        logger.debug(f"Truncated identifier {data!r} to {truncated!r}")
        return cls(truncated)

    @classmethod
    def from_format(
        cls,
        prefix: str,
        pad: int,
        number: int,
        suffix: str = DEFAULT_LEVEL_SUFFIX,
        *,
        strict: bool = False,
    ) -> Identifier:
        """
        Create a numbered level name such as "L0000001.lev".

        The number is left-padded with zeros to `pad` digits. Numbers with
        more digits than `pad` are written in full.

        Args:
            prefix: Level name prefix (e.g. "abc" for abc001.lev)
            pad: Minimum number of digits
            number: Level number
            suffix: File extension including the dot
            strict: Raise instead of truncating when the name is too long

        Returns:
            Identifier for the formatted name (truncated if too long)

        Raises:
            ValueError: If number is negative
            IdentifierOverflowError: If strict and the name exceeds capacity
        """
        if number < 0:
            raise ValueError(f"number must be non-negative: {number}")
        return cls.from_text(f"{prefix}{number:0{max(pad, 0)}d}{suffix}", strict=strict)

    @staticmethod
    def default_pad(prefix: str) -> int:
        """
        Default digit count so that prefix + digits fills eight characters.

        Args:
            prefix: Level name prefix

        Returns:
            8 - len(prefix), never less than 1
        """
        return max(1, 8 - len(prefix))

    # ─────────────────────────────────────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────────────────────────────────────

    def as_text(self) -> str:
        """Decode the stored bytes."""
        return self.raw.decode("utf-8")

    def __str__(self) -> str:
        return self.as_text()

    def __repr__(self) -> str:
        return f"Identifier({self.as_text()!r})"

    def __len__(self) -> int:
        return len(self.raw)

    # ─────────────────────────────────────────────────────────────────────────
    # Comparison
    # ─────────────────────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return self.raw == other.raw

    def __lt__(self, other: Identifier) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return self.raw < other.raw

    def __hash__(self) -> int:
        return hash(self.raw)
