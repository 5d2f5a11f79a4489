"""Motion device configuration, position graphs and logging."""

__version__ = "0.1.0"
__all__ = ["config_manager", "logger", "motion_types"]