"""
Configuration loader for clusterer profiles and environment variables.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional
import yaml


class ConfigLoader:
    """Load and manage clusterer configuration from YAML files and environment."""
    
    CONFIG_DIR = Path(__file__).parent.parent.parent / "configs"
    ENV_VAR = "MARKERCLUSTER_PROFILE"
    DEFAULT_PROFILE = "default"
    
    @classmethod
    def available_profiles(cls) -> list:
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))
    
    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load a clusterer profile.
        
        Args:
            profile_name: Name of the profile (default, dense-city, sparse-rural)
            
        Returns:
            Dictionary with configuration values
            
        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"
        
        if not profile_path.exists():
            available = cls.available_profiles()
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. Available profiles: {', '.join(available)}"
            )
        
        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}
    
    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from MARKERCLUSTER_PROFILE environment variable."""
        return os.getenv(cls.ENV_VAR)
    
    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """
        Load profile from environment variable or use the default profile.
        
        Returns:
            Configuration dictionary
        """
        profile = cls.get_profile_from_env() or cls.DEFAULT_PROFILE
        return cls.load_profile(profile)


def get_config() -> Dict[str, Any]:
    """Convenience function to get current configuration."""
    return ConfigLoader.load_default_or_env_profile()
