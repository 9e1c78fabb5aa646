"""Release pipeline: build, stage, manifest, publish."""

from .errors import ReleaseError
from .manifest import VersionManifest, read_manifest, sha256_file, verify_mirror
from .service import ReleaseDriver, ReleaseReport, StagedArtifact
from .sync import AwsS3Sync, Syncer
from .toolchain import GoToolchain, Toolchain

__all__ = [
    "AwsS3Sync",
    "GoToolchain",
    "ReleaseDriver",
    "ReleaseError",
    "ReleaseReport",
    "StagedArtifact",
    "Syncer",
    "Toolchain",
    "VersionManifest",
    "read_manifest",
    "sha256_file",
    "verify_mirror",
]
