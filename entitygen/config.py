"""Configuration file format for entitygen."""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

CONFIG_NAMES = ["entitygen.yaml", "entitygen.yml", "entitygen.json"]


class EntitygenConfig(BaseModel):
    """entitygen configuration file format.

    Can be saved as entitygen.yaml or entitygen.json.

    Example YAML:
        spec_file: api/openapi.yaml
        package_name: com.example.library.entities
        output_dir: build/generated
    """

    spec_file: str | None = Field(default=None, description="OpenAPI document to generate entities from")
    package_name: str = Field(default="generated.entities", description="Java package of generated classes")
    output_dir: str = Field(default="build/generated", description="Root directory for generated sources")

    def resolve_paths(self, base_dir: Path | None = None) -> "EntitygenConfig":
        """Resolve relative paths to absolute paths.

        Args:
            base_dir: Base directory for resolving relative paths (defaults to cwd)

        Returns:
            New config with resolved paths
        """
        base = base_dir or Path.cwd()

        def absolute(value: str) -> str:
            path = Path(value)
            if not path.is_absolute():
                path = (base / path).resolve()
            return str(path)

        return EntitygenConfig(
            spec_file=absolute(self.spec_file) if self.spec_file else None,
            package_name=self.package_name,
            output_dir=absolute(self.output_dir),
        )


def load_config(config_path: str | Path) -> EntitygenConfig:
    """Load configuration from YAML or JSON file.

    Relative ``spec_file`` and ``output_dir`` values are resolved against the
    directory holding the config file.

    Args:
        config_path: Path to config file (entitygen.yaml or entitygen.json)

    Returns:
        Loaded and validated configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the format is unsupported or the content is not a valid config mapping
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")

    try:
        config = EntitygenConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e

    return config.resolve_paths(path.parent)


def find_config(start_dir: Path | None = None) -> Path | None:
    """Find the nearest config file, searching from start_dir up to the filesystem root.

    Within one directory the names in ``CONFIG_NAMES`` are tried in order.
    """
    start = (start_dir or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        for name in CONFIG_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate

    return None
