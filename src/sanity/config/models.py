"""Sanity configuration data models."""

from dataclasses import dataclass, field

from sanity.types import LogFormat, LogLevel


@dataclass
class PathsConfig:
    """Source and output locations, relative to the project root."""

    source: str = "www"
    output: str = "dist"


@dataclass
class ServerConfig:
    """Dev server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class WatchConfig:
    """File system watcher configuration."""

    debounce_seconds: float = 1.0


@dataclass
class BuildConfig:
    """Build behaviour flags."""

    force_prod: bool = False
    antidote: bool = False  # Bypass the anti-scraping transform
    profile: bool = False  # Log phase durations


@dataclass
class MinifyConfig:
    """Minification configuration (production builds only)."""

    enabled: bool = True
    asset_extensions: list[str] = field(default_factory=lambda: [".js"])


@dataclass
class PoisonConfig:
    """Anti-scraping markup injection."""

    enabled: bool = False


@dataclass
class ScriptsConfig:
    """Build script sandbox configuration."""

    allowed_imports: list[str] | None = None  # None = sandbox defaults
    max_output_size: int = 1024 * 1024


@dataclass
class LoggingComponentsConfig:
    """Per-component log switches."""

    build: bool = True
    walk: bool = True
    script: bool = True
    render: bool = True
    server: bool = True
    watch: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    truncate_at: int = 200
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)


@dataclass
class SanityConfig:
    """Complete sanity configuration."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    minify: MinifyConfig = field(default_factory=MinifyConfig)
    poison: PoisonConfig = field(default_factory=PoisonConfig)
    scripts: ScriptsConfig = field(default_factory=ScriptsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
