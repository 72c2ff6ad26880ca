"""
Configuration module for the rental marketplace.
"""

from .settings import supabase_config, app_config, api_config

__all__ = ['supabase_config', 'app_config', 'api_config']
