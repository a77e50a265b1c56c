"""Manager for user settings and preferences."""

import json
import logging
from typing import Any, Union

from ..db.sqlite import Database
from ..readingorder.schemas import ReadingOrderMode
from .models import Setting
from .schemas import ReadingSettings, SettingKey, SettingResponse

logger = logging.getLogger(__name__)

CUSTOM_PREFIX = "custom:"

# Known settings with type, default and validation
SETTINGS_METADATA = {
    SettingKey.DEFAULT_READING_ORDER: {
        "type": "enum",
        "enum": ReadingOrderMode,
        "default": ReadingOrderMode.PUBLICATION.value,
        "description": "Reading order for newly created series",
    },
    SettingKey.ITEMS_PER_PAGE: {
        "type": "int",
        "default": "20",
        "min": 5,
        "max": 100,
        "description": "Items shown per page",
    },
    SettingKey.SHOW_PUBLICATION_DATES: {
        "type": "bool",
        "default": "true",
        "description": "Show publication dates in book lists",
    },
}

TRUE_VALUES = ("true", "1", "yes")
FALSE_VALUES = ("false", "0", "no")


class SettingsManager:
    """Typed key/value settings.

    Known keys are enumerated in SettingKey and validated against
    SETTINGS_METADATA. Anything else goes through the custom-key methods,
    which store arbitrary JSON values.
    """

    def __init__(self, db: Database):
        """Initialize settings manager."""
        self.db = db

    # ========================================================================
    # Known settings
    # ========================================================================

    def get(self, key: Union[SettingKey, str]) -> Any:
        """Get the typed value of a known setting.

        Raises:
            ValueError: If the key is not a known setting
        """
        key = self._known_key(key)
        metadata = SETTINGS_METADATA[key]

        with self.db.get_session() as session:
            setting = session.query(Setting).filter(Setting.key == key.value).first()
            raw = setting.value if setting else metadata["default"]

        return self._parse_value(raw, metadata)

    def set(self, key: Union[SettingKey, str], value: Any) -> Any:
        """Validate and store a known setting, returning the typed value.

        Raises:
            ValueError: If the key is unknown or the value is invalid
        """
        key = self._known_key(key)
        metadata = SETTINGS_METADATA[key]
        serialized = self._validate_value(key, value, metadata)

        self._write(key.value, serialized, metadata["type"])
        logger.info("Setting %s = %s", key.value, serialized)

        return self._parse_value(serialized, metadata)

    def reset(self, key: Union[SettingKey, str]) -> Any:
        """Reset a known setting to its default value."""
        key = self._known_key(key)

        with self.db.get_session() as session:
            session.query(Setting).filter(Setting.key == key.value).delete()

        return self._parse_value(SETTINGS_METADATA[key]["default"], SETTINGS_METADATA[key])

    def describe(self, key: Union[SettingKey, str]) -> SettingResponse:
        """Get a known setting with its metadata."""
        key = self._known_key(key)
        metadata = SETTINGS_METADATA[key]

        return SettingResponse(
            key=key,
            value=self.get(key),
            default_value=self._parse_value(metadata["default"], metadata),
            value_type=metadata["type"],
            description=metadata.get("description"),
        )

    def get_all(self) -> ReadingSettings:
        """Get all known settings as a structured object."""
        return ReadingSettings(**{key.value: self.get(key) for key in SettingKey})

    # ========================================================================
    # Custom settings
    # ========================================================================

    def get_custom(self, key: str, default: Any = None) -> Any:
        """Get a custom setting, or default if it was never set."""
        self._check_custom_key(key)

        with self.db.get_session() as session:
            setting = (
                session.query(Setting)
                .filter(Setting.key == CUSTOM_PREFIX + key)
                .first()
            )
            if not setting:
                return default
            return json.loads(setting.value)

    def set_custom(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under a custom key.

        Raises:
            ValueError: If the key shadows a known setting
            TypeError: If the value cannot be serialized as JSON
        """
        self._check_custom_key(key)
        self._write(CUSTOM_PREFIX + key, json.dumps(value), "json")

    def remove_custom(self, key: str) -> bool:
        """Remove a custom setting. Returns False if it was not set."""
        self._check_custom_key(key)

        with self.db.get_session() as session:
            deleted = (
                session.query(Setting)
                .filter(Setting.key == CUSTOM_PREFIX + key)
                .delete()
            )
            return deleted > 0

    def list_custom(self) -> dict[str, Any]:
        """Get all custom settings."""
        with self.db.get_session() as session:
            settings = (
                session.query(Setting)
                .filter(Setting.key.startswith(CUSTOM_PREFIX))
                .order_by(Setting.key)
                .all()
            )
            return {
                s.key[len(CUSTOM_PREFIX):]: json.loads(s.value) for s in settings
            }

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def _known_key(self, key: Union[SettingKey, str]) -> SettingKey:
        """Coerce to a SettingKey."""
        try:
            return SettingKey(key)
        except ValueError:
            raise ValueError(f"Unknown setting: {key}") from None

    def _check_custom_key(self, key: str) -> None:
        """Custom keys must be non-empty and must not shadow known keys."""
        if not key or not key.strip():
            raise ValueError("Custom setting key cannot be empty")
        if key in {k.value for k in SettingKey}:
            raise ValueError(f"'{key}' is a known setting; use set() instead")

    def _write(self, key: str, value: str, value_type: str) -> None:
        """Insert or update a setting row."""
        with self.db.get_session() as session:
            setting = session.query(Setting).filter(Setting.key == key).first()

            if setting:
                setting.value = value
                setting.value_type = value_type
            else:
                session.add(Setting(key=key, value=value, value_type=value_type))

    def _parse_value(self, value: str, metadata: dict) -> Any:
        """Parse string value to appropriate type."""
        value_type = metadata["type"]
        if value_type == "bool":
            return value.lower() in TRUE_VALUES
        elif value_type == "int":
            return int(value)
        elif value_type == "enum":
            return metadata["enum"](value)
        else:
            return value

    def _validate_value(self, key: SettingKey, value: Any, metadata: dict) -> str:
        """Validate a value and serialize it for storage."""
        value_type = metadata["type"]

        if value_type == "bool":
            if isinstance(value, bool):
                return "true" if value else "false"
            text = str(value).lower()
            if text in TRUE_VALUES:
                return "true"
            if text in FALSE_VALUES:
                return "false"
            raise ValueError(f"Invalid boolean value for {key.value}: {value}")

        if value_type == "int":
            if isinstance(value, bool):
                raise ValueError(f"Invalid integer value for {key.value}: {value}")
            try:
                int_val = int(value)
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid integer value for {key.value}: {value}") from e
            if "min" in metadata and int_val < metadata["min"]:
                raise ValueError(f"{key.value} must be at least {metadata['min']}")
            if "max" in metadata and int_val > metadata["max"]:
                raise ValueError(f"{key.value} must be at most {metadata['max']}")
            return str(int_val)

        if value_type == "enum":
            enum_class = metadata["enum"]
            try:
                return enum_class(value).value
            except ValueError:
                options = [e.value for e in enum_class]
                raise ValueError(
                    f"Invalid value for {key.value}: {value}. Options: {options}"
                ) from None

        return str(value)
