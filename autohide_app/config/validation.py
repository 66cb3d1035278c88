"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..dom.selectors import compile_selector
from ..errors import InvalidSelectorError

TIMING_FIELDS = {
    "timings": ("expand_delay_ms", "collapse_delay_ms"),
    "reattach": ("resize_debounce_ms", "resize_followup_ms"),
    "pause": ("menu_click_pause_ms",),
}
BOOLEAN_FIELDS = {
    "behavior": ("collapse_on_start", "restore_on_disable"),
}
SELECTOR_FIELDS = {
    "panel": ("panel", "toggle", "content"),
    "guards": ("selectors",),
    "menu_click": ("menu_items", "panel_buttons", "options_buttons"),
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_durations(section: str, params: dict[str, Any]) -> list[ValidationError]:
        """Validate millisecond durations: positive integers."""
        errors = []

        for name in TIMING_FIELDS.get(section, ()):
            if name not in params:
                continue
            value = params[name]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(ValidationError(
                    field=f"{section}.{name}",
                    message="Must be a positive integer (milliseconds)",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_flags(section: str, params: dict[str, Any]) -> list[ValidationError]:
        """Validate boolean switches."""
        errors = []

        for name in BOOLEAN_FIELDS.get(section, ()):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=f"{section}.{name}",
                    message="Must be a boolean",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_selectors(section: str, params: dict[str, Any]) -> list[ValidationError]:
        """Validate that every configured selector compiles."""
        errors = []

        for name in SELECTOR_FIELDS.get(section, ()):
            if name not in params:
                continue
            value = params[name]
            candidates = value if isinstance(value, (list, tuple)) else [value]
            if not candidates:
                errors.append(ValidationError(
                    field=f"{section}.{name}",
                    message="Must list at least one selector",
                    value=value
                ))
                continue
            for candidate in candidates:
                if not isinstance(candidate, str):
                    errors.append(ValidationError(
                        field=f"{section}.{name}",
                        message="Selectors must be strings",
                        value=candidate
                    ))
                    continue
                try:
                    compile_selector(candidate)
                except InvalidSelectorError as e:
                    errors.append(ValidationError(
                        field=f"{section}.{name}",
                        message=str(e),
                        value=candidate
                    ))

        return errors

    @staticmethod
    def validate_panel_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate panel markers beyond selectors."""
        errors = ConfigValidator.validate_selectors("panel", params)

        if "collapsed_max_width_px" in params:
            value = params["collapsed_max_width_px"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                errors.append(ValidationError(
                    field="panel.collapsed_max_width_px",
                    message="Must be a non-negative number",
                    value=value
                ))

        for name in ("collapsed_class", "opened_body_class", "pinned_class"):
            if name in params and (not isinstance(params[name], str) or not params[name].strip()):
                errors.append(ValidationError(
                    field=f"panel.{name}",
                    message="Must be a non-empty class name",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete merged configuration."""
        errors = []

        for section in TIMING_FIELDS:
            errors.extend(ConfigValidator.validate_durations(section, config.get(section, {})))
        for section in BOOLEAN_FIELDS:
            errors.extend(ConfigValidator.validate_flags(section, config.get(section, {})))

        errors.extend(ConfigValidator.validate_panel_params(config.get("panel", {})))
        errors.extend(ConfigValidator.validate_selectors("guards", config.get("guards", {})))
        errors.extend(ConfigValidator.validate_selectors("menu_click", config.get("menu_click", {})))

        settings = config.get("settings", {})
        if "storage_key" in settings and (
            not isinstance(settings["storage_key"], str) or not settings["storage_key"]
        ):
            errors.append(ValidationError(
                field="settings.storage_key",
                message="Must be a non-empty string",
                value=settings["storage_key"]
            ))

        return errors
