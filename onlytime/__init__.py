"""
OnlyTime - Source Package

Converts money into the working time it costs and analyses spending
against income.

DESIGN PRINCIPLES:
1. The hourly rate is the single conversion factor between money and time
2. Malformed input degrades to defaults, it never raises
3. Every value is derived on demand, nothing is cached
4. Storage is a swappable key-value backend
"""

__version__ = "1.0.0"
__author__ = "OnlyTime Team"

# Importing the channel configures structlog for every onlytime module
from onlytime.notifications import NotificationChannel, configure_log_level

__all__ = ["NotificationChannel", "configure_log_level", "__version__"]
