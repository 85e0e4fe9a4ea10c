"""Assembly configuration loaded from YAML files and command-line options."""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from assembler.errors import ConfigError
from schema.model import Feature, FeatureSet


_FLAGS = ("recursive", "use_all_files", "strict_extensions", "require_tested_match")


class AssemblyConfig(BaseModel):
    """
    Settings for one assembly request.

    Attributes:
        lib_dirs: Library root directories to scan.
        test_files: Explicit schema sources under test.
        features: Supported features as ``module:feature`` strings.
                  Empty means every feature is enabled.
        recursive: Scan library roots recursively.
        use_all_files: Validate library sources as top-level units too.
        strict_extensions: Fail on explicit paths without the schema extension.
        require_tested_match: Fail when a tested source has no resolved unit.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    lib_dirs: List[StrictStr] = Field(default_factory=list)
    test_files: List[StrictStr] = Field(default_factory=list)
    features: List[StrictStr] = Field(default_factory=list)
    recursive: StrictBool = False
    use_all_files: StrictBool = False
    strict_extensions: StrictBool = False
    require_tested_match: StrictBool = False

    @field_validator("lib_dirs", "test_files", "features", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> Any:
        """Accept a missing value or a single string for list keys."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("lib_dirs", "test_files", mode="after")
    @classmethod
    def resolve_paths(cls, v: List[str], info: ValidationInfo) -> List[str]:
        """Resolve relative paths against the config file's directory."""
        base = (info.context or {}).get("base")
        if base is None:
            return v
        return [p if Path(p).is_absolute() else str(Path(base) / p) for p in v]

    @field_validator("features", mode="after")
    @classmethod
    def validate_features(cls, v: List[str]) -> List[str]:
        for identifier in v:
            Feature.parse(identifier)
        return v

    def feature_set(self) -> FeatureSet:
        """
        Parse ``features`` into a FeatureSet.

        Raises:
            ConfigError: If an identifier is malformed.
        """
        try:
            return FeatureSet.parse(self.features)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def merged(
        self,
        lib_dirs: Optional[Iterable[str]] = None,
        test_files: Optional[Iterable[str]] = None,
        features: Optional[Iterable[str]] = None,
        **flags: bool,
    ) -> "AssemblyConfig":
        """
        Overlay command-line values on this configuration.

        Lists are extended; a flag is set if it is set on either side.

        Raises:
            ConfigError: If the combined values do not validate.
        """
        unknown = set(flags) - set(_FLAGS)
        if unknown:
            raise TypeError(f"unknown flag(s): {', '.join(sorted(unknown))}")

        data: Dict[str, Any] = self.model_dump()
        data["lib_dirs"] += list(lib_dirs or [])
        data["test_files"] += list(test_files or [])
        data["features"] += list(features or [])
        for name, value in flags.items():
            data[name] = data[name] or bool(value)
        return _validate(data, origin="command line")


def _validate(data: Dict[str, Any], origin: str, base: Optional[Path] = None) -> AssemblyConfig:
    try:
        return AssemblyConfig.model_validate(data, context={"base": base})
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in {origin}: {e}") from e


def load_config(path: Union[str, Path]) -> AssemblyConfig:
    """
    Load an AssemblyConfig from a YAML file.

    Relative paths in ``lib_dirs`` and ``test_files`` are resolved against
    the directory containing the file. An empty file yields the defaults.

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, or holds
                     unknown keys or values of the wrong type.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config file '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in '{path}': {e}") from e

    if data is None:
        return AssemblyConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"config file '{path}' must contain a mapping")

    return _validate(data, origin=f"'{path}'", base=path.parent)
