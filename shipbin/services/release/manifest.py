"""Version manifests (``version.json``) and mirror verification.

A manifest pairs an artifact name with the SHA-256 of its staged binary:

    {"hash":"<64 lowercase hex chars>","binaryPath":"<artifact name>"}

The encoding is compact JSON with ``hash`` first and no trailing newline,
which is what the on-device updater reads. ``binaryPath`` holds the artifact
name, not a path; the key is kept for compatibility.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from shipbin.core.layout import MANIFEST_FILENAME, MirrorLayout
from shipbin.core.result import Err, Ok, Result
from shipbin.core.structured import as_str_dict
from shipbin.services.release.errors import ReleaseError

__all__ = [
    "VersionManifest",
    "read_manifest",
    "sha256_file",
    "stray_entries",
    "verify_mirror",
]

_HEX_DIGEST = re.compile(r"^[0-9a-f]{64}$")


def sha256_file(path: Path) -> str:
    """Lowercase hex SHA-256 of a file, read in chunks."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


@dataclass(frozen=True, slots=True)
class VersionManifest:
    hash: str
    binary_path: str

    def to_json(self) -> str:
        return json.dumps(
            {"hash": self.hash, "binaryPath": self.binary_path},
            separators=(",", ":"),
        )

    @classmethod
    def from_json(cls, text: str) -> Result[VersionManifest, str]:
        try:
            data_obj: object = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(f"invalid JSON: {e}")

        data = as_str_dict(data_obj)
        if data is None:
            return Err("manifest must be a JSON object")
        if set(data) != {"hash", "binaryPath"}:
            return Err(f"unexpected keys: {sorted(data)}")

        digest = data["hash"]
        name = data["binaryPath"]
        if not isinstance(digest, str) or not _HEX_DIGEST.match(digest):
            return Err("hash must be a lowercase hex sha256 digest")
        if not isinstance(name, str) or not name:
            return Err("binaryPath must be a non-empty string")
        return Ok(cls(hash=digest, binary_path=name))


def read_manifest(path: Path) -> Result[VersionManifest, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_mismatch",
                message=f"cannot read manifest: {path}",
                hint=str(e),
            )
        )

    parsed = VersionManifest.from_json(text)
    if isinstance(parsed, Err):
        return Err(
            ReleaseError(
                kind="manifest_mismatch",
                message=f"invalid manifest: {path}",
                hint=parsed.error,
            )
        )
    return Ok(parsed.value)


def verify_mirror(layout: MirrorLayout, artifacts: Iterable[str]) -> Result[None, ReleaseError]:
    """Check that every artifact has a binary and a manifest that matches it."""
    for name in artifacts:
        binary = layout.staged_binary(name)
        if not binary.is_file():
            return Err(
                ReleaseError(
                    kind="manifest_mismatch",
                    message=f"staged binary missing: {binary}",
                )
            )

        manifest = read_manifest(layout.manifest_path(name))
        if isinstance(manifest, Err):
            return manifest

        if manifest.value.binary_path != name:
            return Err(
                ReleaseError(
                    kind="manifest_mismatch",
                    message=f"manifest names {manifest.value.binary_path!r}, expected {name!r}",
                )
            )

        actual = sha256_file(binary)
        if manifest.value.hash != actual:
            return Err(
                ReleaseError(
                    kind="manifest_mismatch",
                    message=f"hash mismatch for {name}",
                    hint=f"manifest {manifest.value.hash}, binary {actual}",
                )
            )

    return Ok(None)


def stray_entries(layout: MirrorLayout, artifacts: Iterable[str]) -> list[Path]:
    """Mirror entries that are not a known artifact's binary or manifest.

    Covers the whole tree: unknown top-level entries, other platform
    directories under an artifact, and extra files next to a staged binary.
    The bucket sync deletes nothing that exists locally, so these would be
    published alongside the release.
    """
    root = layout.mirror_root
    if not root.is_dir():
        return []

    known = set(artifacts)
    strays: list[Path] = []
    for entry in sorted(root.iterdir()):
        if entry.name not in known or not entry.is_dir():
            strays.append(entry)
            continue
        for platform_dir in sorted(entry.iterdir()):
            if platform_dir.name != layout.platform_tag or not platform_dir.is_dir():
                strays.append(platform_dir)
                continue
            expected = {entry.name, MANIFEST_FILENAME}
            strays.extend(p for p in sorted(platform_dir.iterdir()) if p.name not in expected)
    return strays
