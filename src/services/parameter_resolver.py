"""
Parameter Resolver

Merges defaults, an optional named preset and explicit fields into one
SpringConfig. Precedence: explicit > preset > defaults.

Shorthand ("duration:0.8, bounce:0.4") is an alternative, authoritative path:
when present it is applied on top of the defaults only, and neither presets
nor explicit fields are consulted.

Bad input never aborts resolution. Unknown presets, malformed shorthand
tokens and unparsable values become ConfigurationWarnings (logged, and
appended to the caller's list if given) and the field keeps its default.
Values that parse but are out of range are rejected by SpringConfig with
InvalidParameterError.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, TYPE_CHECKING

from models.enums import LogCategory, SolverStrategy
from models.errors import ConfigurationWarning
from models.spring_config import BUILTIN_PRESETS, NUMERIC_FIELDS, Preset, SpringConfig
from utils.enum_helper import EnumHelper
from utils.logger import get_category_logger, get_logger
from utils.parsing import normalize_key, parse_number, split_list

if TYPE_CHECKING:
    from managers.config_manager import ConfigManager

log = get_category_logger(LogCategory.CONFIG)

# Normalized key → SpringConfig field
FIELD_ALIASES: Dict[str, str] = {
    "duration": "duration",
    "bounce": "bounce",
    "mass": "mass",
    "stiffness": "stiffness",
    "damping": "damping",
    "perceptualduration": "perceptual_duration",
    "properties": "properties",
    "solver": "solver",
}

# Host attribute → SpringConfig field
ATTRIBUTE_FIELDS: Dict[str, str] = {
    "data-spring-duration": "duration",
    "data-spring-bounce": "bounce",
    "data-spring-mass": "mass",
    "data-spring-stiffness": "stiffness",
    "data-spring-damping": "damping",
    "data-spring-perceptual-duration": "perceptual_duration",
    "data-spring-properties": "properties",
    "data-spring-solver": "solver",
}
SHORTHAND_ATTRIBUTE = "data-spring"
PRESET_ATTRIBUTE = "data-spring-preset"

# Inside shorthand, commas separate tokens, so property lists use '|' or spaces
SHORTHAND_LIST_SEPARATORS = "| \t"


def _warn(warnings: Optional[List[ConfigurationWarning]], field: str, value: Any, reason: str) -> None:
    warning = ConfigurationWarning(field, value, reason)
    get_logger().config_warning(field, value, reason)
    if warnings is not None:
        warnings.append(warning)


def parse_properties(raw: Any, separators: str = ",") -> Optional[List[str]]:
    """
    Property list from text or a sequence.

    Text is split and trimmed, order and duplicates preserved. Blank text
    means "not supplied" and returns None.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        items = split_list(raw, separators)
        return items or None
    return [str(item).strip() for item in raw]


def coerce_fields(
    raw: Mapping[str, Any],
    warnings: Optional[List[ConfigurationWarning]] = None,
    list_separators: str = ",",
) -> Dict[str, Any]:
    """
    Convert loosely typed key/value input into SpringConfig field overrides.

    Keys are matched case-insensitively, ignoring '-' and '_'. Unknown keys
    and None values are skipped; unparsable values produce a warning and are
    skipped so the base value stays in effect.
    """
    fields: Dict[str, Any] = {}
    for key, value in raw.items():
        field = FIELD_ALIASES.get(normalize_key(key))
        if field is None:
            log.debug(f"Ignoring unknown spring key '{key}'")
            continue
        if value is None:
            continue

        if field in NUMERIC_FIELDS:
            number = parse_number(value)
            if number is None:
                _warn(warnings, field, value, "not a finite number, using default")
                continue
            fields[field] = number

        elif field == "properties":
            properties = parse_properties(value, list_separators)
            if properties is not None:
                fields[field] = tuple(properties)

        elif field == "solver":
            if isinstance(value, SolverStrategy):
                fields[field] = value
                continue
            try:
                fields[field] = EnumHelper.from_string(SolverStrategy, value)
            except ValueError:
                _warn(
                    warnings, field, value,
                    f"unknown solver, expected one of {EnumHelper.list_names(SolverStrategy, lowercase=True)}",
                )
    return fields


def parse_shorthand(
    text: str,
    defaults: Optional[SpringConfig] = None,
    warnings: Optional[List[ConfigurationWarning]] = None,
) -> SpringConfig:
    """
    Build a config from 'key:value' pairs separated by commas.

    Example:
        parse_shorthand("duration:0.8, bounce:0.4")
        # SpringConfig(duration=0.8, bounce=0.4, mass=1.0, stiffness=100.0, ...)

    Tokens missing a key or a value are dropped; parsing continues.
    """
    raw: Dict[str, str] = {}
    for token in text.split(","):
        if not token.strip():
            continue
        key, _, value = token.partition(":")
        key, value = key.strip(), value.strip()
        if not key or not value:
            _warn(warnings, "shorthand", token.strip(), "malformed token dropped")
            continue
        raw[key] = value

    fields = coerce_fields(raw, warnings, SHORTHAND_LIST_SEPARATORS)
    return (defaults or SpringConfig()).with_overrides(**fields)


def resolve(
    defaults: Optional[SpringConfig] = None,
    preset_name: Optional[str] = None,
    shorthand: Optional[str] = None,
    explicit: Optional[Mapping[str, Any]] = None,
    presets: Optional[Mapping[str, Preset]] = None,
    warnings: Optional[List[ConfigurationWarning]] = None,
) -> SpringConfig:
    """
    Resolve one canonical SpringConfig.

    Args:
        defaults: Base values (built-in defaults if None)
        preset_name: Optional preset name (case-insensitive)
        shorthand: Optional shorthand text; wins over everything else
        explicit: Optional explicit fields; win over the preset
        presets: Preset table (built-in table if None)
        warnings: List collecting ConfigurationWarnings

    Raises:
        InvalidParameterError: If a resolved value is out of range
    """
    defaults = defaults or SpringConfig()

    if shorthand is not None and shorthand.strip():
        return parse_shorthand(shorthand, defaults, warnings)

    presets = BUILTIN_PRESETS if presets is None else presets
    overrides: Dict[str, Any] = {}

    if preset_name is not None and preset_name.strip():
        preset = presets.get(preset_name.strip().lower())
        if preset is None:
            _warn(warnings, "preset", preset_name, "unknown preset, using default values")
        else:
            overrides.update(preset.overrides())

    if explicit:
        overrides.update(coerce_fields(explicit, warnings))

    return defaults.with_overrides(**overrides)


def from_attributes(
    attributes: Mapping[str, str],
    defaults: Optional[SpringConfig] = None,
    presets: Optional[Mapping[str, Preset]] = None,
    warnings: Optional[List[ConfigurationWarning]] = None,
) -> SpringConfig:
    """Resolve a config from host attributes (data-spring, data-spring-*)"""
    explicit = {
        field: attributes[attr]
        for attr, field in ATTRIBUTE_FIELDS.items()
        if attr in attributes
    }
    return resolve(
        defaults=defaults,
        preset_name=attributes.get(PRESET_ATTRIBUTE),
        shorthand=attributes.get(SHORTHAND_ATTRIBUTE),
        explicit=explicit,
        presets=presets,
        warnings=warnings,
    )


class ParameterResolver:
    """
    Resolver bound to a loaded defaults + preset table.

    Example:
        config_manager = ConfigManager()
        config_manager.load()
        resolver = ParameterResolver(config_manager)

        config = resolver.resolve(preset_name="bouncy", explicit={"duration": 0.8})
    """

    def __init__(
        self,
        config_manager: Optional["ConfigManager"] = None,
        defaults: Optional[SpringConfig] = None,
        presets: Optional[Mapping[str, Preset]] = None,
    ):
        if config_manager is not None:
            defaults = defaults or config_manager.defaults
            presets = presets if presets is not None else config_manager.presets
        self.defaults = defaults or SpringConfig()
        self.presets: Dict[str, Preset] = dict(BUILTIN_PRESETS if presets is None else presets)

    @property
    def preset_names(self) -> List[str]:
        return list(self.presets.keys())

    def resolve(
        self,
        preset_name: Optional[str] = None,
        shorthand: Optional[str] = None,
        explicit: Optional[Mapping[str, Any]] = None,
        warnings: Optional[List[ConfigurationWarning]] = None,
    ) -> SpringConfig:
        return resolve(self.defaults, preset_name, shorthand, explicit, self.presets, warnings)

    def parse_shorthand(self, text: str, warnings: Optional[List[ConfigurationWarning]] = None) -> SpringConfig:
        return parse_shorthand(text, self.defaults, warnings)

    def from_attributes(
        self,
        attributes: Mapping[str, str],
        warnings: Optional[List[ConfigurationWarning]] = None,
    ) -> SpringConfig:
        return from_attributes(attributes, self.defaults, self.presets, warnings)
