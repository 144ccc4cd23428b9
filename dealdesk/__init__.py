"""DealDesk: pipeline, bid council and settings logic for the sales CRM."""

__version__ = "1.0.0"
