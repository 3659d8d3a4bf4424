"""
Core configuration management
"""
from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """gameq settings"""

    # Paths
    project_root: Path = Path(__file__).parent.parent
    protocols_dir: Path = project_root / "protocols"
    log_dir: Path = project_root / "logs"

    # Query sockets
    socket_timeout_sec: float = 3.0
    socket_read_bytes: int = 8192

    # Address resolution
    resolve_hostnames: bool = True  # False: only IP literals are accepted

    class Config:
        env_prefix = "GAMEQ_"
        env_file = ".env"


settings = Settings()
