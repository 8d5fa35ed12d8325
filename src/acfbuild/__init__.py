"""acfbuild: build configuration for X-Plane plugins using libacfutils.

Resolves the target platform from the build environment and derives the
compiler flags and link libraries a plugin needs on Windows, macOS and Linux.
"""

__version__ = "0.1.0"
