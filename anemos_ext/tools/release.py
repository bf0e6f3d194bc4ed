"""Release asset naming for tools published on GitHub-style release pages.

Download URL:
    https://{host}/{org}/{project}/releases/{version}/download/{project}-{platform}-{arch}

``version`` is usually the literal ``latest``, which the host redirects to
the newest release asset.
"""

from __future__ import annotations

from dataclasses import dataclass

from anemos_ext.core.config import (
    DEFAULT_HOST,
    DEFAULT_ORG,
    DEFAULT_PROJECT,
    DEFAULT_VERSION,
    ReleaseConfig,
)
from anemos_ext.platform.detection import PlatformTarget

__all__ = ["ReleaseSource"]


@dataclass(frozen=True, slots=True)
class ReleaseSource:
    """Where to fetch a platform binary from.

    Attributes:
        host: Release host (e.g., "github.com")
        org: Organisation owning the project
        project: Project name, also the binary and asset prefix
        version: Release tag or "latest"
    """

    host: str = DEFAULT_HOST
    org: str = DEFAULT_ORG
    project: str = DEFAULT_PROJECT
    version: str = DEFAULT_VERSION

    @classmethod
    def from_config(cls, config: ReleaseConfig) -> ReleaseSource:
        return cls(
            host=config.host,
            org=config.org,
            project=config.project,
            version=config.version,
        )

    def binary_name(self, target: PlatformTarget) -> str:
        """Executable filename: "anemos" or "anemos.exe"."""
        return target.binary_name(self.project)

    def asset_name(self, target: PlatformTarget) -> str:
        return f"{self.project}-{target.platform_id}-{target.arch_id}"

    def download_url(self, target: PlatformTarget) -> str:
        asset = self.asset_name(target)
        base = f"https://{self.host}/{self.org}/{self.project}"
        return f"{base}/releases/{self.version}/download/{asset}"
