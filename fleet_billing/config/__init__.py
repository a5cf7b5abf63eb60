"""
Configuration module for the fleet billing engine.
"""
from .settings import FleetBillingConfig, get_config, load_config, reload_config

__all__ = ["FleetBillingConfig", "get_config", "load_config", "reload_config"]
