"""Tests for ghpages.lib.config module."""

import pytest

from ghpages.lib.config import InvalidOptionsError, PublishOptions, load_options, make_options, normalize_keys
from ghpages.lib.errors import ConfigError


class TestDefaults:
    """Test PublishOptions defaults."""

    def test_defaults(self):
        options = make_options()
        assert options.branch == "gh-pages"
        assert options.remote == "origin"
        assert options.git == "git"
        assert options.depth == 1
        assert options.src == ["**/*"]
        assert options.dest == "."
        assert options.remove == "."
        assert options.message == "Updates"
        assert options.push is True
        assert options.history is True
        assert options.add is False
        assert options.dotfiles is False
        assert options.silent is False
        assert options.repo is None
        assert options.timeout is None

    def test_defaults_match_dataclass(self):
        assert make_options() == PublishOptions()

    def test_src_list_not_shared(self):
        a = PublishOptions()
        a.src.append("x")
        assert PublishOptions().src == ["**/*"]


class TestMakeOptions:
    """Test make_options overrides and validation."""

    def test_overrides(self):
        options = make_options(branch="main", depth=5, message="Deploy")
        assert options.branch == "main"
        assert options.depth == 5
        assert options.message == "Deploy"

    def test_none_keeps_default(self):
        assert make_options(branch=None).branch == "gh-pages"

    def test_string_src_becomes_list(self):
        assert make_options(src="*.html").src == ["*.html"]

    def test_camel_case_keys(self):
        options = make_options(cacheDir="/tmp/cache", beforeAdd=lambda git: None)
        assert options.cache_dir == "/tmp/cache"
        assert callable(options.before_add)

    def test_unknown_option(self):
        with pytest.raises(ConfigError, match="Unknown option"):
            make_options(bogus=True)

    def test_invalid_depth(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            make_options(depth=0)
        assert exc_info.value.options == ["depth"]
        assert "depth (--depth)" in str(exc_info.value)

    def test_invalid_type(self):
        with pytest.raises(InvalidOptionsError):
            make_options(push="yes")

    def test_user_requires_name_and_email(self):
        with pytest.raises(InvalidOptionsError):
            make_options(user={"name": "Bot"})

    def test_valid_user(self):
        options = make_options(user={"name": "Bot", "email": "bot@example.com"})
        assert options.user == {"name": "Bot", "email": "bot@example.com"}

    def test_before_add_must_be_callable(self):
        with pytest.raises(ConfigError, match="callable"):
            make_options(before_add="not a function")

    def test_negative_timeout(self):
        with pytest.raises(InvalidOptionsError):
            make_options(timeout=-1)

    def test_validation_error_is_config_error(self):
        assert issubclass(InvalidOptionsError, ConfigError)


class TestLoadOptions:
    """Test YAML options files."""

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "ghpages.yaml"
        path.write_text(
            "branch: main\n"
            "dest: docs\n"
            "src:\n  - '**/*.html'\n"
            "user:\n  name: Bot\n  email: bot@example.com\n"
        )
        data = load_options(path)
        assert data == {
            "branch": "main",
            "dest": "docs",
            "src": ["**/*.html"],
            "user": {"name": "Bot", "email": "bot@example.com"},
        }

    def test_camel_case_keys(self, tmp_path):
        path = tmp_path / "ghpages.yaml"
        path.write_text("cacheDir: /tmp/cache\n")
        assert load_options(path) == {"cache_dir": "/tmp/cache"}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "ghpages.yaml"
        path.write_text("")
        assert load_options(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_options(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "ghpages.yaml"
        path.write_text("branch: [unclosed\n")
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_options(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "ghpages.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_options(path)

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "ghpages.yaml"
        path.write_text("brnach: main\n")
        with pytest.raises(ConfigError, match="Unknown option.*brnach"):
            load_options(path)

    def test_before_add_rejected(self, tmp_path):
        path = tmp_path / "ghpages.yaml"
        path.write_text("beforeAdd: something\n")
        with pytest.raises(ConfigError, match="before_add"):
            load_options(path)


class TestOptionErrors:
    """Test reporting of rejected option values."""

    def test_every_bad_option_reported(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            make_options(depth=0, push="yes", message="")
        assert exc_info.value.options == ["depth", "message", "push"]
        message = str(exc_info.value)
        assert "depth (--depth)" in message
        assert "push (--no-push)" in message
        assert "message (--message)" in message

    def test_nested_user_error_names_option(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            make_options(user={"name": "Bot"})
        assert exc_info.value.options == ["user"]
        assert "user (--user)" in str(exc_info.value)

    def test_file_errors_name_the_file(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("depth: one\ntimeout: 0\n")
        with pytest.raises(InvalidOptionsError) as exc_info:
            load_options(path)
        assert exc_info.value.source == str(path)
        assert exc_info.value.options == ["depth", "timeout"]
        assert str(path) in str(exc_info.value)


class TestNormalizeKeys:
    def test_mixed_keys(self):
        assert normalize_keys({"cacheDir": 1, "dest": 2, "before_add": 3}) == {
            "cache_dir": 1, "dest": 2, "before_add": 3,
        }
