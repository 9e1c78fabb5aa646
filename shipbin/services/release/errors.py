from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "build_failed",
    "output_missing",
    "filesystem",
    "publish_failed",
    "manifest_mismatch",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """A failed release step: which kind, what failed, and how to fix it."""

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

