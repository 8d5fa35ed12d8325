"""Tests for compiler flag derivation."""

from pathlib import Path

import pytest

from acfbuild.flags import (
    BASE_CFLAGS,
    XPLM_API_DEFINITIONS,
    derive_compile_flags,
    include_dirs,
    xplm_definitions,
)
from acfbuild.platform import Platform

AUX = "/acfutils"
SDK = "/xplane_sdk"

_IDENTITY = {"-DIBM=1", "-DIBM=0", "-DLIN=1", "-DLIN=0", "-DAPL=1", "-DAPL=0"}

# ---------------------------------------------------------------------------
# include_dirs() / include flags
# ---------------------------------------------------------------------------


class TestIncludePaths:
    def test_macos_first_four_flags(self) -> None:
        flags = derive_compile_flags(Platform.MACOS, AUX, SDK)
        assert flags[:4] == [
            "-I/acfutils/include",
            "-I/acfutils/mac64/include",
            "-I/xplane_sdk/CHeaders/XPLM",
            "-I/xplane_sdk/CHeaders/Widgets",
        ]

    @pytest.mark.parametrize(
        "platform,tag",
        [(Platform.WINDOWS, "mingw64"), (Platform.LINUX, "lin64"), (Platform.MACOS, "mac64")],
    )
    def test_tag_adapts_per_platform(self, platform: Platform, tag: str) -> None:
        assert include_dirs(platform, AUX, SDK)[1] == f"/acfutils/{tag}/include"

    def test_accepts_path_objects(self) -> None:
        dirs = include_dirs(Platform.LINUX, Path("/opt/acf"), Path("/opt/sdk"))
        assert dirs == [
            "/opt/acf/include",
            "/opt/acf/lin64/include",
            "/opt/sdk/CHeaders/XPLM",
            "/opt/sdk/CHeaders/Widgets",
        ]

    def test_trailing_slash_not_doubled(self) -> None:
        dirs = include_dirs(Platform.LINUX, "/opt/acf/", "/opt/sdk/")
        assert dirs[0] == "/opt/acf/include"
        assert dirs[2] == "/opt/sdk/CHeaders/XPLM"

    def test_relative_roots(self) -> None:
        dirs = include_dirs(Platform.WINDOWS, "libacfutils", "SDK")
        assert dirs[0] == "libacfutils/include"
        assert dirs[3] == "SDK/CHeaders/Widgets"

    def test_paths_not_required_to_exist(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope"
        flags = derive_compile_flags(Platform.LINUX, missing, missing)
        assert flags[0] == f"-I{missing}/include"


# ---------------------------------------------------------------------------
# Platform-identity and API-version definitions
# ---------------------------------------------------------------------------


class TestDefinitions:
    @pytest.mark.parametrize(
        "platform,on",
        [(Platform.WINDOWS, "IBM"), (Platform.MACOS, "APL"), (Platform.LINUX, "LIN")],
    )
    def test_exactly_one_identity_on(self, platform: Platform, on: str) -> None:
        flags = derive_compile_flags(platform, AUX, SDK)
        identity = [f for f in flags if f in _IDENTITY]
        assert len(identity) == 3
        assert [f for f in identity if f.endswith("=1")] == [f"-D{on}=1"]
        assert sum(1 for f in identity if f.endswith("=0")) == 2

    def test_identity_order(self) -> None:
        assert xplm_definitions(Platform.WINDOWS)[:3] == ["IBM=1", "LIN=0", "APL=0"]
        assert xplm_definitions(Platform.MACOS)[:3] == ["IBM=0", "LIN=0", "APL=1"]
        assert xplm_definitions(Platform.LINUX)[:3] == ["IBM=0", "LIN=1", "APL=0"]

    def test_api_versions_identical_across_platforms(self) -> None:
        expected = ["-DXPLM200=1", "-DXPLM210=1", "-DXPLM300=1",
                    "-DXPLM301=1", "-DXPLM302=1", "-DXPLM303=1"]
        for platform in Platform:
            flags = derive_compile_flags(platform, AUX, SDK)
            assert flags[-6:] == expected

    def test_api_versions_follow_identity(self) -> None:
        flags = derive_compile_flags(Platform.LINUX, AUX, SDK)
        assert flags[-9:-6] == ["-DIBM=0", "-DLIN=1", "-DAPL=0"]

    def test_bare_definitions_have_no_prefix(self) -> None:
        defs = xplm_definitions(Platform.MACOS)
        assert len(defs) == 3 + len(XPLM_API_DEFINITIONS)
        assert not any(d.startswith("-D") for d in defs)


# ---------------------------------------------------------------------------
# Fixed and platform-specific compiler flags
# ---------------------------------------------------------------------------


class TestCompilerFlags:
    def test_base_flags_follow_includes(self) -> None:
        for platform in Platform:
            flags = derive_compile_flags(platform, AUX, SDK)
            assert flags[4:8] == list(BASE_CFLAGS)

    def test_windows_specific(self) -> None:
        flags = derive_compile_flags(Platform.WINDOWS, AUX, SDK)
        assert flags[8:10] == ["-D_WIN32_WINNT=0x0600", "-DLIBXML_STATIC"]
        assert "-D_GNU_SOURCE" not in flags
        assert "-DLACF_GLEW_USE_NATIVE_TLS=0" not in flags

    def test_macos_specific(self) -> None:
        flags = derive_compile_flags(Platform.MACOS, AUX, SDK)
        assert flags[8] == "-DLACF_GLEW_USE_NATIVE_TLS=0"
        assert "-DLIBXML_STATIC" not in flags
        assert "-D_GNU_SOURCE" not in flags

    def test_linux_specific(self) -> None:
        flags = derive_compile_flags(Platform.LINUX, AUX, SDK)
        assert flags[8] == "-D_GNU_SOURCE"
        assert "-D_WIN32_WINNT=0x0600" not in flags

    def test_full_linux_list(self) -> None:
        assert derive_compile_flags(Platform.LINUX, AUX, SDK) == [
            "-I/acfutils/include",
            "-I/acfutils/lin64/include",
            "-I/xplane_sdk/CHeaders/XPLM",
            "-I/xplane_sdk/CHeaders/Widgets",
            "-std=c11",
            "-DLZMA_API_STATIC",
            "-DPCRE2_STATIC",
            "-DPCRE2_CODE_UNIT_WIDTH=8",
            "-D_GNU_SOURCE",
            "-DIBM=0",
            "-DLIN=1",
            "-DAPL=0",
            "-DXPLM200=1",
            "-DXPLM210=1",
            "-DXPLM300=1",
            "-DXPLM301=1",
            "-DXPLM302=1",
            "-DXPLM303=1",
        ]


class TestDeterminism:
    def test_repeated_calls_identical(self) -> None:
        for platform in Platform:
            first = derive_compile_flags(platform, AUX, SDK)
            second = derive_compile_flags(platform, AUX, SDK)
            assert first == second

    def test_mutating_result_does_not_leak(self) -> None:
        flags = derive_compile_flags(Platform.WINDOWS, AUX, SDK)
        flags.clear()
        defs = xplm_definitions(Platform.WINDOWS)
        defs.append("EXTRA=1")
        assert derive_compile_flags(Platform.WINDOWS, AUX, SDK)
        assert "EXTRA=1" not in xplm_definitions(Platform.WINDOWS)
