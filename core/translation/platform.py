"""Resolution of the platform-identity headers.

Keys restricted to a mobile application are only accepted by the service when the
request names that application. The identity is attached when the host platform is
one the service knows about; everywhere else no header is sent.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal, TypeAlias

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["PlatformIdentity", "PlatformName", "current_platform"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

PlatformName: TypeAlias = Literal["ios", "android", "other"]

IOS_BUNDLE_HEADER: Final[str] = "X-Ios-Bundle-Identifier"
ANDROID_PACKAGE_HEADER: Final[str] = "X-Android-Package"
ANDROID_CERT_HEADER: Final[str] = "X-Android-Cert"


def current_platform() -> PlatformName:
    """Map ``sys.platform`` to the platforms with a dedicated identity header."""
    if sys.platform == "ios":
        return "ios"
    if sys.platform == "android":
        return "android"
    return "other"


@dataclass(frozen=True)
class PlatformIdentity:
    """Identity of the calling application.

    Attributes:
        package_name (str): iOS bundle identifier or Android package name.
        build_signature (str): SHA-1 fingerprint of the Android signing certificate.
        platform (PlatformName | None): Platform to build headers for. None detects it at call time.
    """

    package_name: str = ""
    build_signature: str = ""
    platform: PlatformName | None = None

    async def headers(self) -> dict[str, str]:
        """Build the identity header set for the current platform.

        Never raises: missing identity information yields an empty dict.
        """
        platform: PlatformName = self.platform or current_platform()
        if not self.package_name:
            return {}

        if platform == "ios":
            return {IOS_BUNDLE_HEADER: self.package_name}
        if platform == "android":
            if not self.build_signature:
                logger.debug("No build signature configured, '%s' header omitted", ANDROID_CERT_HEADER)
                return {ANDROID_PACKAGE_HEADER: self.package_name}
            return {ANDROID_PACKAGE_HEADER: self.package_name, ANDROID_CERT_HEADER: self.build_signature}
        return {}
