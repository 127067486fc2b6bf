import os
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib  # pyright: ignore[reportMissingImports]


# Settings key constants
SETTING_LOGGING_PATH = 'logging.path'
SETTING_LOGGING_LEVEL = 'logging.level'
SETTING_REPORT_INODES = 'report.inodes'
SETTING_INODES_ROOT = 'inodes.root'
SETTING_MANIFEST_STRICT = 'manifest.strict'

CONFIG_ENVIRONMENT_VARIABLE = 'METAUDIT_CONFIG'


class AuditSettings:
    """Read-only view of an audit settings file (TOML).

    The class does not know which keys exist; callers pass their own defaults. Without a
    settings file every get() returns its default.

    Example:
        settings = AuditSettings.from_environment(args.config)
        strict = settings.get(SETTING_MANIFEST_STRICT, False)
        root = settings.get('inodes.root', '/')
    """

    def __init__(self, settings_path: str | os.PathLike | None = None):
        """Load settings from settings_path.

        Args:
            settings_path: TOML file to load, or None for empty settings

        Raises:
            FileNotFoundError: settings_path is given but does not exist
            tomllib.TOMLDecodeError: The file is not valid TOML
        """
        self._settings_path = Path(settings_path) if settings_path is not None else None
        self._settings = {}

        if self._settings_path is not None:
            with open(self._settings_path, 'rb') as f:
                self._settings = tomllib.load(f)

    @classmethod
    def from_environment(cls, settings_path: str | os.PathLike | None = None) -> 'AuditSettings':
        """Use settings_path if given, otherwise the file named by METAUDIT_CONFIG, if any."""
        if settings_path is None:
            settings_path = os.environ.get(CONFIG_ENVIRONMENT_VARIABLE) or None
        return cls(settings_path)

    @property
    def path(self) -> Path | None:
        return self._settings_path

    def get(self, key: str, default=None):
        """Get a setting value by dotted key path.

        'report.inodes' looks up settings['report']['inodes']. The default is returned when
        any component is missing or an intermediate value is not a table.

        Examples:
            >>> settings.get(SETTING_REPORT_INODES, False)
            True
            >>> settings.get('nonexistent.key', 'fallback')
            'fallback'
        """
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value
