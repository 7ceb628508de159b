from pydantic_settings import BaseSettings
from pathlib import Path

# Project root directory (parent of the studytrack package)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'studytrack.db'}"
    
    # AI Provider Configuration
    ai_provider: str = "ollama"  # "ollama" or "claude"
    
    # Ollama settings (for local development)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:latest"
    
    # Claude API settings (for production)
    claude_api_key: str = ""
    claude_model: str = "claude-3-5-sonnet-20241022"
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    
    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        extra = "ignore"

settings = Settings()
