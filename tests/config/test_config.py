# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Config loading, lookup and binding."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from flycors.core.config import Config, config_properties


@config_properties(prefix="myapp.limits")
@dataclass
class LimitsProperties:
    max_age: int = 10
    strict: bool = False
    name: str = "default"


@dataclass
class Undecorated:
    value: str = "nope"


class TestConfigGet:
    def test_dot_notation(self):
        config = Config({"flycors": {"cors": {"max-age": 60}}})
        assert config.get("flycors.cors.max-age") == 60

    def test_missing_key_returns_default(self):
        config = Config({})
        assert config.get("flycors.cors.enabled", False) is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FLYCORS_CORS_MAX_AGE", "120")
        config = Config({"flycors": {"cors": {"max-age": 60}}})
        assert config.get("flycors.cors.max-age") == "120"

    def test_placeholder_from_env(self, monkeypatch):
        monkeypatch.setenv("APP_ORIGIN", "https://app.example.com")
        config = Config({"flycors": {"origin": "${APP_ORIGIN}"}})
        assert config.get("flycors.origin") == "https://app.example.com"

    def test_placeholder_default(self):
        config = Config({"flycors": {"origin": "${FLYCORS_TEST_UNSET_ORIGIN:http://localhost:3000}"}})
        assert config.get("flycors.origin") == "http://localhost:3000"

    def test_placeholder_config_reference(self):
        config = Config({"app": {"host": "https://a.test"}, "flycors": {"origin": "${app.host}"}})
        assert config.get("flycors.origin") == "https://a.test"

    def test_unresolvable_placeholder(self):
        config = Config({"flycors": {"origin": "${FLYCORS_TEST_MISSING_KEY}"}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("flycors.origin")

    def test_get_section(self):
        config = Config({"flycors": {"cors": {"enabled": True}}})
        assert config.get_section("flycors.cors") == {"enabled": True}
        assert config.get_section("flycors.missing") == {}


class TestConfigFromFile:
    def test_yaml_with_profile(self, tmp_path):
        (tmp_path / "flycors.yaml").write_text("flycors:\n  cors:\n    enabled: true\n    max-age: 60\n")
        (tmp_path / "flycors-prod.yaml").write_text("flycors:\n  cors:\n    max-age: 3600\n")

        config = Config.from_file(tmp_path / "flycors.yaml", active_profiles=["prod"])

        assert config.get("flycors.cors.enabled") is True
        assert config.get("flycors.cors.max-age") == 3600
        assert len(config.loaded_sources) == 2

    def test_toml(self, tmp_path):
        (tmp_path / "flycors.toml").write_text('[flycors.cors]\nallowed-origins = ["https://a.test"]\n')
        config = Config.from_file(tmp_path / "flycors.toml")
        assert config.get("flycors.cors.allowed-origins") == ["https://a.test"]

    def test_missing_file_is_empty(self, tmp_path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get_section("flycors") == {}
        assert config.loaded_sources == []


class TestConfigBindDataclass:
    def test_bind_with_coercion(self):
        config = Config({"myapp": {"limits": {"max-age": "30", "strict": "yes", "name": "x"}}})
        props = config.bind(LimitsProperties)
        assert props.max_age == 30
        assert props.strict is True
        assert props.name == "x"

    def test_bind_honours_env_override(self, monkeypatch):
        monkeypatch.setenv("FLYCORS_MYAPP_LIMITS_STRICT", "true")
        config = Config({"myapp": {"limits": {"strict": False}}})
        assert config.bind(LimitsProperties).strict is True

    def test_bind_defaults(self):
        props = Config({}).bind(LimitsProperties)
        assert props == LimitsProperties()

    def test_undecorated_rejected(self):
        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Undecorated)
