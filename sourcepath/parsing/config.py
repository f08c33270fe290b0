"""YAML configuration loading for resolver sessions."""

from pathlib import Path

import yaml

from sourcepath.exceptions import ConfigError
from sourcepath.models import ResolverConfig

KNOWN_KEYS = frozenset(ResolverConfig().to_dict())


class ConfigLoader:
    """Parses resolver configuration from YAML files.

    Example file:

        mode: packaged
        source_paths:
          - ~/.m2/repository/org/clojure/clojurescript/1.9.946/clojurescript-1.9.946.jar
          - src
        embedded_root: build/embedded
        cache_dir: .cache
    """

    def load(self, config_path: Path) -> ResolverConfig:
        """Load a ResolverConfig from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ResolverConfig populated from the file, defaults elsewhere

        Raises:
            ConfigError: If the file is missing, is not valid YAML, or holds
                         invalid values
        """
        config_path = Path(config_path).expanduser()

        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            raise ConfigError(f"Error reading {config_path}: {e}")

        return self.parse(text, source=str(config_path))

    def parse(self, text: str, source: str = "<string>") -> ResolverConfig:
        """Parse configuration from YAML text.

        Raises:
            ConfigError: If the text is not a YAML mapping or holds invalid values
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {source}: {e}")

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config must be a YAML dictionary, got {type(data).__name__} in {source}"
            )

        unknown = sorted(set(data) - KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown config keys in {source}: {', '.join(unknown)}")

        source_paths = data.get("source_paths", [])
        if isinstance(source_paths, str) or not isinstance(source_paths, list):
            raise ConfigError(f"source_paths must be a list in {source}")

        try:
            return ResolverConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value in {source}: {e}")
