#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from autohide_app.config.loader import ConfigLoader
from autohide_app.config.validation import ConfigValidator, ValidationError


def validate_host_config(loader: ConfigLoader, host_id: str) -> List[ValidationError]:
    """Validate the merged configuration for a specific host."""
    config = loader.merge_config(host_id)
    return ConfigValidator.validate_config(config)


def configured_hosts(loader: ConfigLoader) -> List[str]:
    hosts_file = loader.config_dir / "hosts.yaml"
    if not hosts_file.exists():
        return []
    with open(hosts_file) as f:
        return sorted((yaml.safe_load(f) or {}).get("hosts", {}))


def main():
    """Main validation function."""
    print("🔍 Validating auto-hide configuration...")

    loader = ConfigLoader.create()
    hosts = configured_hosts(loader) + ["unknown-host"]  # Should use defaults

    all_valid = True

    for host_id in hosts:
        print(f"\n📊 Validating {host_id}...")

        try:
            errors = validate_host_config(loader, host_id)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {host_id} configuration is valid")

        except (OSError, yaml.YAMLError) as e:
            print(f"❌ Error loading {host_id}: {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
