"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigValidationError
from .defaults import AutoHideParams, get_default_config
from .validation import ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: AutoHideParams

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_host_config(self, host_id: str) -> dict[str, Any]:
        """Load host-specific configuration overrides."""
        hosts_file = self.config_dir / "hosts.yaml"

        if not hosts_file.exists():
            return {}

        with open(hosts_file) as f:
            hosts_config = yaml.safe_load(f) or {}

        return hosts_config.get("hosts", {}).get(host_id, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        host_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Host-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        host_config = self.load_host_config(host_id)
        config = self._deep_merge(config, host_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_params(
        self,
        host_id: str = "default",
        overrides: Optional[dict[str, Any]] = None
    ) -> AutoHideParams:
        """
        Build validated engine parameters for a host.

        Raises:
            ConfigValidationError: If any merged value is invalid
        """
        config = self.merge_config(host_id, overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigValidationError(
                f"Invalid configuration for host {host_id!r}: "
                + "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in errors),
                errors=errors,
                context={"host_id": host_id},
            )

        return self._build_params(config)

    def _build_params(self, config: dict[str, Any]) -> AutoHideParams:
        sections = {}
        for section_field in fields(AutoHideParams):
            section_cls = type(getattr(self.defaults, section_field.name))
            values = config.get(section_field.name, {})
            known = {f.name for f in fields(section_cls)}
            kwargs = {
                name: tuple(value) if isinstance(value, list) else value
                for name, value in values.items()
                if name in known
            }
            sections[section_field.name] = section_cls(**kwargs)
        return AutoHideParams(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
