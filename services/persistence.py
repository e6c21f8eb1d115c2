# services/persistence.py
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
import threading
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

import jsonschema

from core.expression import UNIT_SYMBOL_PATTERN
from core.formatting import MAX_PRECISION
from core.settings import SETTINGS_VERSION, ConverterSettings

log = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"

SETTINGS_SCHEMA: dict = {
    "type": "object",
    "required": ["version", "custom_units"],
    "properties": {
        "version": {"type": "integer"},
        "precision": {"type": "integer", "minimum": 0, "maximum": MAX_PRECISION},
        "integer_only": {"type": "boolean"},
        "check_families": {"type": "boolean"},
        "custom_units": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["symbol", "factor"],
                "properties": {
                    "symbol": {"type": "string", "minLength": 1, "pattern": UNIT_SYMBOL_PATTERN},
                    "factor": {"type": "number"},
                    "offset": {"type": "number"},
                    "family": {"type": ["string", "null"]},
                },
            },
        },
    },
}


def _expand(path: Union[str, Path]) -> Path:
    return Path(os.path.expanduser(str(path))).resolve()


class ConfigError(RuntimeError):
    pass


class ConfigManager:
    """
    JSON persistence with:
    - Atomic writes (tempfile + os.replace)
    - Schema validation (jsonschema)
    - Versioning + simple migration hooks
    - Thread-safety across calls
    - Automatic backup (.bak) on write

    Typical use:
        cfg = ConfigManager(app_name="luniconvert")
        settings = cfg.load_settings()
        settings.add_unit(CustomUnit("stone", 6.35029))
        cfg.save_settings(settings)
    """

    def __init__(
        self,
        app_name: str = "luniconvert",
        base_dir: Optional[Union[str, Path]] = None,
    ):
        self._lock = threading.RLock()
        self.app_name = app_name
        self.base_dir = _expand(base_dir or Path.home() / f".{app_name}")
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / "logs"

    # ------------- project-specific helpers -------------

    def load_settings(self) -> ConverterSettings:
        default = ConverterSettings().to_dict()
        data = self.load(
            SETTINGS_FILE,
            default=default,
            version=SETTINGS_VERSION,
            schema=SETTINGS_SCHEMA,
            migrate=self._migrate_settings,
        )
        return ConverterSettings.from_dict(data)

    def save_settings(self, settings: Any) -> None:
        """Accepts a ConverterSettings (or anything with .to_dict) or a plain dict."""
        if hasattr(settings, "to_dict") and callable(getattr(settings, "to_dict")):
            payload = settings.to_dict()
        else:
            payload = settings

        if not isinstance(payload, dict):
            raise ConfigError("settings must be dict or model with to_dict().")

        payload.setdefault("version", SETTINGS_VERSION)
        payload.setdefault("custom_units", [])
        try:
            jsonschema.validate(instance=payload, schema=SETTINGS_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ConfigError(f"Refusing to save invalid settings: {e.message}") from e

        self.save(SETTINGS_FILE, payload)

    # ------------- generic API -------------

    def load(
        self,
        filename: str,
        *,
        default: Any,
        version: int,
        migrate: Optional[Callable[[dict, int, int], dict]] = None,
        schema: Optional[dict] = None,
        on_corruption: str = "backup_then_reset",  # or "raise"
    ) -> Any:
        """
        Load a JSON file with optional migration & schema validation.
        - default: returned if missing/corrupt/invalid (and written to disk)
        - version: current schema version
        - migrate: fn(old_data, old_version, new_version) -> new_data
        - schema: jsonschema document the loaded data must satisfy
        - on_corruption: "backup_then_reset" | "raise"
        """
        path = self._path(filename)
        with self._lock:
            if not path.exists():
                self._atomic_write(path, default)
                return default

            try:
                data = self._read_json(path)
                old_version = self._version_of(data)
            except (OSError, ValueError) as e:
                if on_corruption == "raise":
                    raise ConfigError(f"Failed to read {path}: {e}") from e
                log.warning("Could not read %s (%s); resetting to defaults.", path, e)
                self._backup_corrupt(path)
                self._atomic_write(path, default)
                return default

            # Version / migration
            if old_version != version:
                # keep the pre-migration file; later steps may overwrite it
                self._backup_corrupt(path, suffix=f".v{old_version}.bak")
                if migrate:
                    try:
                        data = migrate(data if isinstance(data, dict) else {}, old_version, version)
                    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
                        log.warning("Migration of %s from v%s failed (%s); resetting.", path, old_version, e)
                        self._backup_corrupt(path, suffix=".migrate.bak")
                        self._atomic_write(path, default)
                        return default
                else:
                    # No migration provided: assume breaking change → reset to default
                    data = default
                if isinstance(data, dict):
                    data["version"] = version
                self._atomic_write(path, data)
                log.info("Migrated %s from v%s to v%s.", path.name, old_version, version)

            if schema is not None:
                try:
                    jsonschema.validate(instance=data, schema=schema)
                except jsonschema.ValidationError as e:
                    if on_corruption == "raise":
                        raise ConfigError(f"{path} failed validation: {e.message}") from e
                    log.warning("Schema validation failed for %s: %s; resetting.", filename, e.message)
                    self._backup_corrupt(path, suffix=".invalid.bak")
                    self._atomic_write(path, default)
                    return default

            return data

    def save(self, filename: str, data: Any) -> None:
        """
        Save JSON with atomic replace and backup of previous file.
        Accepts dicts or dataclasses.
        """
        payload = asdict(data) if is_dataclass(data) else data
        if not isinstance(payload, (dict, list)):
            raise ConfigError("Only dict or list (or dataclass) can be saved as JSON.")
        path = self._path(filename)
        with self._lock:
            self._atomic_write(path, payload, make_backup=True)

    # ------------- internal utils -------------

    def _path(self, filename: str) -> Path:
        return self.base_dir / filename

    def _read_json(self, path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _version_of(data: Any) -> int:
        if not isinstance(data, dict):
            return 0
        v = data.get("version", 0)
        # bool is an int subclass; "true" is not a version
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"version must be an integer, got {v!r}")
        return v

    def _atomic_write(self, path: Path, data: Any, make_backup: bool = False) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=path.stem + ".", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            if path.exists() and make_backup:
                backup = path.with_suffix(path.suffix + ".bak")
                shutil.copy2(path, backup)
            os.replace(tmp, path)  # atomic on POSIX/NTFS
        finally:
            # If replace succeeded, tmp is gone
            if os.path.exists(tmp):
                os.remove(tmp)

    def _backup_corrupt(self, path: Path, *, suffix: str = ".bak") -> None:
        target = path.with_suffix(path.suffix + suffix)
        try:
            shutil.copy2(path, target)
        except OSError as e:
            log.warning("Could not back up %s to %s: %s", path, target, e)

    # ------------- migrations -------------

    def _migrate_settings(self, old: dict, old_v: int, new_v: int) -> dict:
        """
        v0 stored custom units as {"units": {symbol: [factor, offset]}}.
        """
        data = dict(old) if isinstance(old, dict) else {}

        units = data.setdefault("custom_units", [])
        if not isinstance(units, list):
            raise TypeError(f"custom_units must be a list, got {type(units).__name__}")

        legacy = data.pop("units", None)
        if isinstance(legacy, dict):
            known = {u.get("symbol") for u in units if isinstance(u, dict)}
            for symbol, spec in legacy.items():
                if symbol in known:
                    continue
                if isinstance(spec, (list, tuple)) and spec:
                    factor = float(spec[0])
                    offset = float(spec[1]) if len(spec) > 1 else 0.0
                elif isinstance(spec, (int, float)) and not isinstance(spec, bool):
                    factor, offset = float(spec), 0.0
                else:
                    log.warning("Dropping malformed legacy unit %r: %r", symbol, spec)
                    continue
                units.append({"symbol": symbol, "factor": factor, "offset": offset, "family": None})

        data.setdefault("precision", 2)
        data.setdefault("integer_only", False)
        data.setdefault("check_families", False)
        return data
