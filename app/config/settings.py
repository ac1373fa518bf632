from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # App Info
    app_name: str = "WMS API"
    version: str = "1.0.0"
    debug: bool = False
    api_prefix: str = "/wms/v1"
    
    # Database
    database_url: str
    auto_create_tables: bool = True
    
    # Security
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24h
    
    # CORS
    allowed_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Orígenes permitidos para CORS"
    )
    
    # Logging
    log_level: str = Field(default="INFO", description="Nivel de log raíz")
    
    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

settings = Settings()
