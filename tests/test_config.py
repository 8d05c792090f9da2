"""
Tests for the configuration system.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from config import (
    AuthConfig,
    ClientConfig,
    Config,
    PubSubConfig,
    get_config,
    load_config,
    load_config_file,
    merge_configs,
    strip_jsonc_comments,
)


class TestStripJSONComments:
    """Test JSONC comment stripping."""

    def test_single_line_comments(self):
        jsonc = """
        {
            // This is a comment
            "key": "value"
        }
        """
        result = strip_jsonc_comments(jsonc)
        assert "//" not in result
        assert json.loads(result) == {"key": "value"}

    def test_multi_line_comments(self):
        jsonc = """
        {
            /* This is a
               multi-line comment */
            "key": "value"
        }
        """
        assert json.loads(strip_jsonc_comments(jsonc)) == {"key": "value"}

    def test_trailing_comment_and_url(self):
        """Comment markers inside strings survive."""
        jsonc = '{"url": "http://localhost:8080", "port": 1 // trailing\n}'
        assert json.loads(strip_jsonc_comments(jsonc)) == {
            "url": "http://localhost:8080",
            "port": 1,
        }


class TestConfigModels:
    """Test Pydantic config models."""

    def test_defaults(self):
        config = Config()
        assert config.pubsub.max_queue_size == 0
        assert config.pubsub.exclude_self == {"message-added": True, "group-added": True}
        assert config.server.port == 8080
        assert config.server.cors_origins == ["*"]
        assert config.auth.jwt_secret is None
        assert config.auth.required is False
        assert config.client.max_reconnects is None
        assert config.seed_demo_data is False

    def test_defaults_are_not_shared(self):
        first, second = PubSubConfig(), PubSubConfig()
        first.exclude_self["message-added"] = False
        assert second.exclude_self["message-added"] is True

    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            PubSubConfig(max_queue_size=-1)
        with pytest.raises(ValidationError):
            ClientConfig(reconnect_delay=-1)
        with pytest.raises(ValidationError):
            AuthConfig(token_ttl=0)


class TestLoading:
    """Test config file discovery and merging."""

    def test_merge_configs(self):
        base = {"pubsub": {"max_queue_size": 10, "exclude_self": {"a": True}}}
        override = {"pubsub": {"exclude_self": {"a": False}}}
        assert merge_configs(base, override) == {
            "pubsub": {"max_queue_size": 10, "exclude_self": {"a": False}}
        }

    def test_missing_file(self, temp_dir: Path):
        assert load_config_file(temp_dir / "chatty.jsonc") is None

    def test_invalid_file(self, temp_dir: Path):
        path = temp_dir / "chatty.json"
        path.write_text("{not json")
        assert load_config_file(path) is None

    def test_no_files(self, temp_dir: Path):
        config = load_config(temp_dir, home=temp_dir / "home")
        assert config == Config()

    def test_project_overrides_global(self, temp_dir: Path):
        home = temp_dir / "home"
        (home / ".chatty").mkdir(parents=True)
        (home / ".chatty" / "chatty.jsonc").write_text(
            '{"pubsub": {"max_queue_size": 5}, "server": {"port": 9000}}'
        )
        project = temp_dir / "project"
        project.mkdir()
        (project / "chatty.jsonc").write_text(
            """
            {
                // keep pushing messages back to their authors
                "pubsub": {"exclude_self": {"message-added": false}}
            }
            """
        )

        config = load_config(project, home=home)

        assert config.pubsub.max_queue_size == 5
        assert config.pubsub.exclude_self == {"message-added": False}
        assert config.server.port == 9000

    def test_get_config_is_cached(self, temp_dir: Path):
        get_config.cache_clear()
        try:
            assert get_config(temp_dir) is get_config(temp_dir)
        finally:
            get_config.cache_clear()
