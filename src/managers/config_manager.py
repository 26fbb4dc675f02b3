"""
Config Manager

Loads spring defaults and the preset table from YAML, with include support.
Falls back to factory defaults, then to the built-in constants.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.enums import LogCategory
from models.errors import ConfigurationWarning, InvalidParameterError
from models.spring_config import BUILTIN_PRESETS, Preset, SpringConfig
from services.parameter_resolver import coerce_fields
from utils.enum_helper import EnumHelper
from utils.logger import get_logger
from utils.parsing import parse_number

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent
PRESET_FIELDS = ("bounce", "stiffness", "damping", "duration")


class ConfigManager:
    """
    Spring configuration manager

    Loads config/spring.yaml and processes its include: directive.
    Exposes the resolved defaults (SpringConfig) and the preset table.

    Example:
        config = ConfigManager()
        config.load()

        config.defaults            # SpringConfig
        config.presets["bouncy"]   # Preset(bounce=0.4, stiffness=200.0, damping=5.0)
    """

    def __init__(self, config_path="config/spring.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main spring.yaml (relative to src/ unless absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.warnings: List[ConfigurationWarning] = []

        self.defaults: SpringConfig = SpringConfig()
        self.presets: Dict[str, Preset] = dict(BUILTIN_PRESETS)

    def _resolve_path(self, path: Path) -> Path:
        return path if path.is_absolute() else SRC_DIR / path

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main spring.yaml
        2. If it has 'include:' list, load and merge those files
        3. Fallback to factory_defaults.yaml on failure
        4. Fallback to built-in constants if that fails too
        5. Build defaults and presets

        Returns:
            Merged config data dict
        """
        full_path = self._resolve_path(self.config_path)
        try:
            self.data = self._load_file(full_path)
        except Exception as ex:
            log.error("Failed to load spring config", path=str(full_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            try:
                self.data = self._load_file(self._resolve_path(self.factory_defaults_path))
            except Exception as ex2:
                log.error("Failed to load factory defaults", error=str(ex2))
                log.warn("Using built-in defaults")
                self.data = {}

        self.warnings = []
        self.defaults = self._parse_defaults(self.data.get("defaults") or {})
        self.presets = self._parse_presets(self.data.get("presets"))

        log.info(
            "Spring config loaded",
            presets=", ".join(self.presets.keys()) or "-",
            solver=EnumHelper.to_string(self.defaults.solver, lowercase=True),
        )
        return self.data

    def _load_file(self, path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            main_config = yaml.safe_load(f) or {}

        if not isinstance(main_config, dict):
            raise ValueError(f"{path.name} must contain a mapping")

        if "include" in main_config:
            log.debug("Using include-based configuration")
            merged = self._load_with_includes(main_config["include"], path.parent)
            # Keys in the main file win over included ones
            merged.update({k: v for k, v in main_config.items() if k != "include"})
            return merged
        return main_config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["defaults.yaml", "presets.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        return merged

    # ===== Parsing =====

    def _parse_defaults(self, raw: Dict[str, Any]) -> SpringConfig:
        """Apply YAML defaults onto the built-in ones, field by field"""
        builtin = SpringConfig()
        if not isinstance(raw, dict):
            log.warn("'defaults' must be a mapping, using built-in defaults")
            return builtin

        fields = coerce_fields(raw, self.warnings)
        config = builtin
        for name, value in fields.items():
            try:
                config = config.with_overrides(**{name: value})
            except InvalidParameterError as ex:
                self.warnings.append(ConfigurationWarning(name, value, str(ex)))
                log.warn(f"Invalid default for {name}, keeping built-in value", error=str(ex))
        return config

    def _parse_presets(self, raw: Optional[Dict[str, Any]]) -> Dict[str, Preset]:
        if raw is None:
            return dict(BUILTIN_PRESETS)
        if not isinstance(raw, dict):
            log.warn("'presets' must be a mapping, using built-in presets")
            return dict(BUILTIN_PRESETS)

        presets: Dict[str, Preset] = {}
        for name, values in raw.items():
            key = str(name).strip().lower()
            if not isinstance(values, dict):
                log.warn(f"Preset '{name}' is not a mapping, skipped")
                continue

            numbers: Dict[str, float] = {}
            for field in PRESET_FIELDS:
                if field not in values:
                    continue
                number = parse_number(values[field])
                if number is None:
                    self.warnings.append(ConfigurationWarning(f"presets.{key}.{field}", values[field], "not a number"))
                    log.warn(f"Preset '{key}' has invalid {field}, ignored", value=repr(values[field]))
                    continue
                numbers[field] = number

            unknown = set(values) - set(PRESET_FIELDS)
            if unknown:
                log.debug(f"Preset '{key}': ignoring keys", keys=", ".join(sorted(map(str, unknown))))

            presets[key] = Preset(key, **numbers)
        return presets
