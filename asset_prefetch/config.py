"""Configuration management."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_GRAPHQL_ENDPOINT = "http://localhost:3000/graphql"

PLAYER_IMAGE_TEMPLATE = (
    "https://pga-tour-res.cloudinary.com/image/upload/"
    "c_thumb,g_face,z_0.7,q_auto,f_auto,dpr_2.0,w_80,h_80,b_rgb:F2F2F2,"
    "d_stub:default_avatar_light.webp/headshots_{id}"
)

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class Settings:
    """Run configuration, read once from the environment and never mutated."""
    
    graphql_endpoint: str = DEFAULT_GRAPHQL_ENDPOINT
    output_root: Path = Path("public")
    concurrency: int = 5
    download_timeout: float = 0
    query_timeout: float = 30
    player_image_template: str = PLAYER_IMAGE_TEMPLATE
    default_extension: str = "jpg"
    fail_on_download_errors: bool = False
    
    # Logging
    logs_dir: Path = Path("logs")
    log_level: str = "INFO"
    log_max_bytes: int = 10 * 1024 * 1024  # 10 MB
    log_backup_count: int = 10
    
    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.
        
        Args:
            env: Mapping to read instead of ``os.environ``; when omitted,
                a ``.env`` file is loaded first
            
        Returns:
            Settings instance
        """
        if env is None:
            load_dotenv()
            env = os.environ
        
        return cls(
            graphql_endpoint=env.get("PUBLIC_GRAPHQL_ENDPOINT") or DEFAULT_GRAPHQL_ENDPOINT,
            output_root=Path(env.get("OUTPUT_ROOT", "public")),
            concurrency=int(env.get("CONCURRENCY", "5")),
            download_timeout=float(env.get("DOWNLOAD_TIMEOUT", "0")),
            query_timeout=float(env.get("QUERY_TIMEOUT", "30")),
            player_image_template=env.get("PLAYER_IMAGE_TEMPLATE") or PLAYER_IMAGE_TEMPLATE,
            default_extension=env.get("DEFAULT_EXTENSION", "jpg"),
            fail_on_download_errors=(
                env.get("FAIL_ON_DOWNLOAD_ERRORS", "false").lower() in _TRUTHY
            ),
            logs_dir=Path(env.get("LOGS_DIR", "logs")),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_max_bytes=int(env.get("LOG_MAX_BYTES", str(10 * 1024 * 1024))),
            log_backup_count=int(env.get("LOG_BACKUP_COUNT", "10")),
        )
    
    @property
    def images_dir(self) -> Path:
        return self.output_root / "images"
    
    @property
    def players_dir(self) -> Path:
        return self.images_dir / "players"
    
    @property
    def tournaments_dir(self) -> Path:
        return self.images_dir / "tournaments"
    
    def get_log_level(self) -> int:
        """
        Get logging level as integer.
        
        Returns:
            Logging level constant
        """
        return getattr(logging, self.log_level.upper(), logging.INFO)
    
    def validate(self) -> list[str]:
        """
        Validate configuration.
        
        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        
        if not self.graphql_endpoint.startswith(("http://", "https://")):
            errors.append("PUBLIC_GRAPHQL_ENDPOINT must be an http(s) URL")
        
        if self.concurrency < 1:
            errors.append("CONCURRENCY must be >= 1")
        
        if self.download_timeout < 0:
            errors.append("DOWNLOAD_TIMEOUT must be >= 0")
        
        if self.query_timeout <= 0:
            errors.append("QUERY_TIMEOUT must be > 0")
        
        if "{id}" not in self.player_image_template:
            errors.append("PLAYER_IMAGE_TEMPLATE must contain an {id} placeholder")
        
        if not self.default_extension.isalnum():
            errors.append("DEFAULT_EXTENSION must be alphanumeric")
        
        return errors
    
    def display(self, logger: logging.Logger) -> None:
        """Log current configuration."""
        logger.info("=== Configuration ===")
        logger.info(f"GRAPHQL_ENDPOINT: {self.graphql_endpoint}")
        logger.info(f"OUTPUT_ROOT: {self.output_root}")
        logger.info(f"CONCURRENCY: {self.concurrency}")
        logger.info(f"DOWNLOAD_TIMEOUT: {self.download_timeout or 'None'}")
        logger.info(f"QUERY_TIMEOUT: {self.query_timeout}s")
        logger.info(f"FAIL_ON_DOWNLOAD_ERRORS: {self.fail_on_download_errors}")
        logger.info(f"LOGS_DIR: {self.logs_dir}")
        logger.info(f"LOG_LEVEL: {self.log_level}")
        logger.info("=" * 30)
