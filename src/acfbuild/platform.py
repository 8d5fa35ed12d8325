"""Target platform resolution for acfbuild.

Maps the target-OS identifier handed over by the surrounding build tool onto
the closed :class:`Platform` enumeration, and holds the per-platform profile
table that every flag and library derivation reads from.

Usage::

    from acfbuild.platform import current_platform, resolve, short_tag

    plat = resolve("macos")          # Platform.MACOS
    plat = current_platform()        # reads $ACFBUILD_TARGET_OS
    short_tag(plat)                  # "mac64"

Invalid input never falls back to a default platform: :func:`resolve` raises
:class:`UnrecognizedPlatformError` and :func:`current_platform` raises
:class:`MissingTargetEnvironmentError` when the variable is unset.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

# Environment variable naming the build's target operating system.
TARGET_ENV_VAR = "ACFBUILD_TARGET_OS"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class PlatformError(ValueError):
    """Base class for target platform resolution failures."""


class UnrecognizedPlatformError(PlatformError):
    """The platform identifier is not one of the supported tokens."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        supported = ", ".join(p.value for p in Platform)
        super().__init__(f"Unsupported target platform {identifier!r} (supported: {supported})")


class MissingTargetEnvironmentError(PlatformError):
    """The environment variable naming the target platform is not set."""

    def __init__(self, var: str) -> None:
        self.var = var
        super().__init__(f"{var} is not set; cannot determine the target platform")


# ---------------------------------------------------------------------------
# Platform enumeration
# ---------------------------------------------------------------------------


class Platform(Enum):
    """Supported target operating systems, valued by their identifier token."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @classmethod
    def from_identifier(cls, identifier: str) -> Platform:
        """Validated constructor: exact, case-sensitive token match."""
        for member in cls:
            if member.value == identifier:
                return member
        raise UnrecognizedPlatformError(identifier)

    @property
    def profile(self) -> PlatformProfile:
        return PROFILES[self]

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Per-platform profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlatformProfile:
    """Everything that varies between platforms, in one place.

    Library fields are tuples so that an empty tuple means "nothing to add"
    at that position of the link order.
    """

    short_tag: str
    # Identity definitions, in IBM / LIN / APL order.
    identity: tuple[str, str, str]
    cflags: tuple[str, ...]
    glew_lib: str
    gdi_libs: tuple[str, ...]
    net_libs: tuple[str, ...]
    thread_libs: tuple[str, ...]
    system_libs: tuple[str, ...]
    opengl_lib: str


PROFILES: dict[Platform, PlatformProfile] = {
    Platform.WINDOWS: PlatformProfile(
        short_tag="mingw64",
        identity=("IBM=1", "LIN=0", "APL=0"),
        cflags=("-D_WIN32_WINNT=0x0600", "-DLIBXML_STATIC"),
        glew_lib="glew32mx",
        gdi_libs=("gdi32",),
        net_libs=("ws2_32", "crypt32"),
        thread_libs=(),
        system_libs=("dbghelp", "psapi", "ssp", "bcrypt", "winmm"),
        opengl_lib="opengl32",
    ),
    Platform.MACOS: PlatformProfile(
        short_tag="mac64",
        identity=("IBM=0", "LIN=0", "APL=1"),
        cflags=("-DLACF_GLEW_USE_NATIVE_TLS=0",),
        glew_lib="GLEWmx",
        gdi_libs=(),
        net_libs=(),
        thread_libs=(),
        system_libs=(),
        opengl_lib="framework=OpenGL",
    ),
    Platform.LINUX: PlatformProfile(
        short_tag="lin64",
        identity=("IBM=0", "LIN=1", "APL=0"),
        cflags=("-D_GNU_SOURCE",),
        glew_lib="GLEWmx",
        gdi_libs=(),
        net_libs=(),
        thread_libs=("pthread",),
        system_libs=(),
        opengl_lib="GL",
    ),
}


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve(identifier: str) -> Platform:
    """Map a target identifier (``windows``, ``macos``, ``linux``) to a Platform."""
    return Platform.from_identifier(identifier)


def current_platform(
    environ: Mapping[str, str] | None = None,
    var: str = TARGET_ENV_VAR,
) -> Platform:
    """Resolve the target platform from the build environment.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``).
        var: Name of the variable holding the target identifier.

    Raises:
        MissingTargetEnvironmentError: *var* is not set.
        UnrecognizedPlatformError: *var* holds an unsupported value.
    """
    if environ is None:
        environ = os.environ
    value = environ.get(var)
    if value is None:
        raise MissingTargetEnvironmentError(var)
    return resolve(value)


def short_tag(platform: Platform) -> str:
    """Short tag naming the platform's include subdirectory in libacfutils."""
    return platform.profile.short_tag


def supported_identifiers() -> list[str]:
    """Return the accepted identifier tokens in declaration order."""
    return [p.value for p in Platform]
