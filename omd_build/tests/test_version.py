"""
test_version — version resolution.

  - A non-blank override is used verbatim and git is never asked.
  - Without an override the latest tag's patch is bumped: 2.5.9 -> 2.5.10-canary.
  - Malformed tags fail fast with VersionTagError.
"""
import pytest

from omd_build.core.environment import MappingEnvironment
from omd_build.core.version import (
    VersionSource,
    bump_canary,
    read_override,
    resolve_version,
)
from omd_build.errors import CommandFailedError, VersionTagError


class TestBumpCanary:

    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("2.5.9", "2.5.10-canary"),
            ("0.0.0", "0.0.1-canary"),
            ("0.0.20", "0.0.21-canary"),
            ("v1.2.3", "v1.2.4-canary"),
        ],
    )
    def test_patch_incremented(self, tag, expected):
        assert bump_canary(tag) == expected

    def test_trailing_newline_ignored(self):
        assert bump_canary("2.5.9\n") == "2.5.10-canary"

    def test_custom_suffix(self):
        assert bump_canary("1.0.0", suffix="nightly") == "1.0.1-nightly"

    @pytest.mark.parametrize("tag", ["1.2", "1", "1.2.3.4", "release"])
    def test_wrong_segment_count_rejected(self, tag):
        with pytest.raises(VersionTagError, match="MAJOR.MINOR.PATCH"):
            bump_canary(tag)

    @pytest.mark.parametrize("tag", ["1.2.x", "1.2.3-rc1", "1.2.", "1.2.-1"])
    def test_non_numeric_patch_rejected(self, tag):
        with pytest.raises(VersionTagError, match="not a number"):
            bump_canary(tag)


class TestReadOverride:

    def test_unset(self):
        assert read_override(MappingEnvironment({}), "ohmydot_version") is None

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_treated_as_unset(self, value):
        env = MappingEnvironment({"ohmydot_version": value})
        assert read_override(env, "ohmydot_version") is None

    def test_value_returned_verbatim(self):
        env = MappingEnvironment({"ohmydot_version": "1.2.3"})
        assert read_override(env, "ohmydot_version") == "1.2.3"


class TestResolveVersion:

    def test_override_wins_regardless_of_tags(self, fake_runner, build_settings):
        env = MappingEnvironment({"ohmydot_version": "1.2.3"})
        resolved = resolve_version(env, fake_runner, build_settings)

        assert resolved.value == "1.2.3"
        assert resolved.source == VersionSource.OVERRIDE
        assert fake_runner.called("git", "describe") == []

    def test_canary_from_latest_tag(self, fake_runner, build_settings, empty_env, capsys):
        resolved = resolve_version(empty_env, fake_runner, build_settings)

        assert resolved.value == "2.5.10-canary"
        assert resolved.source == VersionSource.CANARY
        assert "Version not set" in capsys.readouterr().out

    def test_zero_tag(self, fake_runner, build_settings, empty_env):
        fake_runner.on(["git", "describe", "--tags", "--abbrev=0"], stdout="0.0.0\n")
        assert resolve_version(empty_env, fake_runner, build_settings).value == "0.0.1-canary"

    def test_blank_override_falls_back_to_tag(self, fake_runner, build_settings):
        env = MappingEnvironment({"ohmydot_version": "  "})
        assert resolve_version(env, fake_runner, build_settings).value == "2.5.10-canary"

    def test_no_tags_is_fatal(self, fake_runner, build_settings, empty_env):
        fake_runner.on(
            ["git", "describe", "--tags", "--abbrev=0"],
            stderr="fatal: No names found, cannot describe anything.",
            exit_code=128,
        )
        with pytest.raises(CommandFailedError, match="No names found"):
            resolve_version(empty_env, fake_runner, build_settings)

    def test_malformed_tag_is_fatal(self, fake_runner, build_settings, empty_env):
        fake_runner.on(["git", "describe", "--tags", "--abbrev=0"], stdout="nightly\n")
        with pytest.raises(VersionTagError):
            resolve_version(empty_env, fake_runner, build_settings)

    def test_uses_configured_variable_name(self, fake_runner, build_settings):
        build_settings.VERSION_ENV_VAR = "OMD_VERSION"
        env = MappingEnvironment({"ohmydot_version": "9.9.9", "OMD_VERSION": "3.0.0"})
        assert resolve_version(env, fake_runner, build_settings).value == "3.0.0"
