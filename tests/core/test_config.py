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
"""Tests for Config — file loading, env overrides, placeholders, binding."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from aspectlog.core.config import Config, config_properties
from aspectlog.core.properties import InterceptorProperties, LoggingProperties


@config_properties(prefix="app.retry")
@dataclass
class RetrySettings:
    attempts: int = 3
    backoff: float = 0.5
    enabled: bool = False
    name: str = "default"


class TestGet:
    def test_dot_notation(self) -> None:
        config = Config({"aspectlog": {"interceptor": {"enabled": False}}})
        assert config.get("aspectlog.interceptor.enabled") is False

    def test_missing_key_returns_default(self) -> None:
        assert Config({}).get("aspectlog.missing", "fallback") == "fallback"

    def test_env_var_overrides_file_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ASPECTLOG_INTERCEPTOR_LOGGER_NAME", "from-env")
        config = Config({"aspectlog": {"interceptor": {"logger_name": "from-file"}}})
        assert config.get("aspectlog.interceptor.logger_name") == "from-env"

    def test_placeholder_from_other_key(self) -> None:
        config = Config({"app": {"name": "billing", "logger": "${app.name}.audit"}})
        assert config.get("app.logger") == "billing.audit"

    def test_placeholder_default(self) -> None:
        config = Config({"app": {"logger": "${UNSET_ASPECTLOG_VAR:fallback}"}})
        assert config.get("app.logger") == "fallback"

    def test_unresolvable_placeholder_raises(self) -> None:
        config = Config({"app": {"logger": "${UNSET_ASPECTLOG_VAR}"}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("app.logger")

    def test_circular_placeholder_raises(self) -> None:
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError, match="Circular"):
            config.get("a")

    def test_get_section(self) -> None:
        config = Config({"aspectlog": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("aspectlog.logging.level") == {"root": "DEBUG"}
        assert config.get_section("aspectlog.nothing") == {}


class TestBind:
    def test_binds_values_with_coercion(self) -> None:
        config = Config({"app": {"retry": {"attempts": "5", "backoff": "1.5", "enabled": "yes"}}})
        settings = config.bind(RetrySettings)
        assert settings == RetrySettings(attempts=5, backoff=1.5, enabled=True, name="default")

    def test_env_override_is_bound(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ASPECTLOG_INTERCEPTOR_ENABLED", "false")
        assert Config({}).bind(InterceptorProperties).enabled is False

    def test_undecorated_class_is_rejected(self) -> None:
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_property_defaults(self) -> None:
        assert Config({}).bind(InterceptorProperties) == InterceptorProperties(enabled=True, logger_name="aspectlog")
        assert Config({}).bind(LoggingProperties) == LoggingProperties(format="console", adapter="structlog")


class TestSources:
    def test_bundled_defaults_are_loaded(self, tmp_path: Path) -> None:
        config = Config.from_sources(tmp_path)
        assert config.get("aspectlog.logging.level.root") == "INFO"
        assert config.loaded_sources == ["aspectlog-defaults.yaml (bundled defaults)"]

    def test_yaml_toml_and_profile_merge_order(self, tmp_path: Path) -> None:
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "aspectlog.yaml").write_text("aspectlog:\n  interceptor:\n    logger_name: base\n")
        (tmp_path / "aspectlog.toml").write_text('[aspectlog.logging]\nformat = "json"\n')
        (tmp_path / "aspectlog-prod.yaml").write_text("aspectlog:\n  interceptor:\n    enabled: false\n")

        config = Config.from_sources(tmp_path, active_profiles=["prod"], load_defaults=False)

        assert config.get("aspectlog.interceptor.logger_name") == "base"
        assert config.get("aspectlog.logging.format") == "json"
        assert config.get("aspectlog.interceptor.enabled") is False
        assert len(config.loaded_sources) == 3
        assert config.loaded_sources[-1].endswith("(profile: prod)")

    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("aspectlog:\n  logging:\n    format: json\n")

        config = Config.from_file(path)

        assert config.get("aspectlog.logging.format") == "json"
        assert config.get("aspectlog.interceptor.enabled") is True
