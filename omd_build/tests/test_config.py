"""
Settings defaults and environment overrides.
"""
from omd_build.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("OMD_BUILD_DEBUG_ENV_VAR", raising=False)
        s = Settings()

        assert s.VERSION_ENV_VAR == "ohmydot_version"
        assert s.DEBUG_ENV_VAR == "OHMYDOT_DEBUG"
        assert s.DEFAULT_OUT == "./build/"
        assert s.CANARY_SUFFIX == "canary"

    def test_link_symbols(self):
        s = Settings(LINK_PACKAGE="example.com/x/cmd")
        assert s.link_symbols == ["example.com/x/cmd.Version", "example.com/x/cmd.CommitHash"]

    def test_prefixed_env_override(self, monkeypatch):
        monkeypatch.setenv("OMD_BUILD_DEBUG_ENV_VAR", "OMD_DEV_BIN")
        monkeypatch.setenv("OMD_BUILD_GO_BINARY", "/usr/local/go/bin/go")
        s = Settings()

        assert s.DEBUG_ENV_VAR == "OMD_DEV_BIN"
        assert s.GO_BINARY == "/usr/local/go/bin/go"

    def test_unprefixed_name_ignored(self, monkeypatch):
        monkeypatch.setenv("GO_BINARY", "/should/not/apply")
        monkeypatch.delenv("OMD_BUILD_GO_BINARY", raising=False)
        assert Settings().GO_BINARY == "go"
