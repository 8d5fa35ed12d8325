"""Tests for target platform resolution."""

import pytest

from acfbuild.platform import (
    PROFILES,
    TARGET_ENV_VAR,
    MissingTargetEnvironmentError,
    Platform,
    PlatformError,
    UnrecognizedPlatformError,
    current_platform,
    resolve,
    short_tag,
    supported_identifiers,
)

# ---------------------------------------------------------------------------
# resolve()
# ---------------------------------------------------------------------------


class TestResolve:
    @pytest.mark.parametrize(
        "identifier,expected",
        [
            ("windows", Platform.WINDOWS),
            ("macos", Platform.MACOS),
            ("linux", Platform.LINUX),
        ],
    )
    def test_recognized_tokens(self, identifier: str, expected: Platform) -> None:
        assert resolve(identifier) is expected

    @pytest.mark.parametrize("identifier", ["Windows", "MACOS", "Linux", " linux", "linux\n"])
    def test_case_and_whitespace_sensitive(self, identifier: str) -> None:
        with pytest.raises(UnrecognizedPlatformError):
            resolve(identifier)

    def test_unknown_platform_names_value(self) -> None:
        with pytest.raises(UnrecognizedPlatformError, match="'freebsd'") as exc_info:
            resolve("freebsd")
        assert exc_info.value.identifier == "freebsd"

    def test_empty_string_rejected(self) -> None:
        with pytest.raises(UnrecognizedPlatformError):
            resolve("")

    def test_message_lists_supported(self) -> None:
        with pytest.raises(UnrecognizedPlatformError, match="windows, macos, linux"):
            resolve("android")

    def test_error_hierarchy(self) -> None:
        with pytest.raises(PlatformError):
            resolve("ios")
        with pytest.raises(ValueError):
            resolve("ios")

    def test_from_identifier_matches_resolve(self) -> None:
        for plat in Platform:
            assert Platform.from_identifier(plat.value) is resolve(plat.value)


# ---------------------------------------------------------------------------
# current_platform()
# ---------------------------------------------------------------------------


class TestCurrentPlatform:
    def test_reads_default_variable(self) -> None:
        assert current_platform({TARGET_ENV_VAR: "macos"}) is Platform.MACOS

    def test_reads_custom_variable(self) -> None:
        env = {"MY_TARGET": "windows", TARGET_ENV_VAR: "linux"}
        assert current_platform(env, var="MY_TARGET") is Platform.WINDOWS

    def test_missing_variable(self) -> None:
        with pytest.raises(MissingTargetEnvironmentError, match=TARGET_ENV_VAR) as exc_info:
            current_platform({})
        assert exc_info.value.var == TARGET_ENV_VAR

    def test_invalid_value_in_environment(self) -> None:
        with pytest.raises(UnrecognizedPlatformError):
            current_platform({TARGET_ENV_VAR: "freebsd"})

    def test_empty_value_is_not_missing(self) -> None:
        with pytest.raises(UnrecognizedPlatformError):
            current_platform({TARGET_ENV_VAR: ""})

    def test_defaults_to_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(TARGET_ENV_VAR, "linux")
        assert current_platform() is Platform.LINUX

    def test_os_environ_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(TARGET_ENV_VAR, raising=False)
        with pytest.raises(MissingTargetEnvironmentError):
            current_platform()


# ---------------------------------------------------------------------------
# short_tag() and profiles
# ---------------------------------------------------------------------------


class TestShortTag:
    def test_tags(self) -> None:
        assert short_tag(Platform.WINDOWS) == "mingw64"
        assert short_tag(Platform.MACOS) == "mac64"
        assert short_tag(Platform.LINUX) == "lin64"

    def test_tags_unique(self) -> None:
        tags = [short_tag(p) for p in Platform]
        assert len(set(tags)) == len(tags)


class TestProfiles:
    def test_every_platform_has_profile(self) -> None:
        assert set(PROFILES) == set(Platform)

    def test_profiles_are_frozen(self) -> None:
        with pytest.raises(AttributeError):
            PROFILES[Platform.LINUX].short_tag = "other"  # type: ignore[misc]

    def test_supported_identifiers(self) -> None:
        assert supported_identifiers() == ["windows", "macos", "linux"]

    def test_str_is_identifier(self) -> None:
        assert str(Platform.MACOS) == "macos"
