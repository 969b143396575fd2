"""
Configuration Management Module

Handles configuration loading from environment variables and .env files.
"""

import os
from typing import Dict, Any, Optional
from dotenv import load_dotenv


class Config:
    """Configuration manager for RFP Bid Agent."""
    
    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration.
        
        Args:
            env_file: Path to .env file (defaults to .env in current directory)
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()
        
        self.google_api_key = os.getenv("GOOGLE_API_KEY", "")
        self.model_name = os.getenv("GEMINI_MODEL", "gemini-1.5-pro")
        self.catalog_path = os.getenv("CATALOG_PATH", "")
        self.synonyms_path = os.getenv("SYNONYMS_PATH", "")
        self.top_n = int(os.getenv("TOP_N", "3"))
        self.max_workers = int(os.getenv("MAX_WORKERS", "4"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        
    def validate(self) -> bool:
        """
        Validate that required configuration is present.
        
        Returns:
            True if valid, raises ValueError otherwise
        """
        if not self.google_api_key:
            raise ValueError(
                "GOOGLE_API_KEY not set. Please set it in .env file or environment."
            )
        if self.top_n < 1:
            raise ValueError(f"TOP_N must be a positive integer, got {self.top_n}")
        if self.max_workers < 1:
            raise ValueError(f"MAX_WORKERS must be a positive integer, got {self.max_workers}")
        return True
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (the API key is left out)."""
        return {
            "model_name": self.model_name,
            "catalog_path": self.catalog_path,
            "synonyms_path": self.synonyms_path,
            "top_n": self.top_n,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
        }
