"""
Configuration settings for the discrete auction.

This module provides centralized configuration management
with environment variable support and validation.
"""

import os
from typing import Optional, Dict, Any


class Settings:
    """
    Configuration settings for the discrete auction.

    Supports environment variables and provides sensible defaults.
    Prices are configured in currency subunits.
    """

    def __init__(self):
        """Initialize settings from environment variables."""
        # Auction limits
        self.max_order_count = int(os.getenv("AUCTION_MAX_ORDER_COUNT", "1000000"))
        self.min_quantity = int(os.getenv("AUCTION_MIN_QUANTITY", "1"))
        self.max_quantity = int(os.getenv("AUCTION_MAX_QUANTITY", "1000"))
        self.min_price = int(os.getenv("AUCTION_MIN_PRICE", "100"))  # 1.00
        self.max_price = int(os.getenv("AUCTION_MAX_PRICE", "10000"))  # 100.00

        # Server configuration
        self.rest_host = os.getenv("REST_HOST", "0.0.0.0")
        self.rest_port = int(os.getenv("REST_PORT", "5000"))

        # Logging configuration
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_file = os.getenv("LOG_FILE", "") or None

        # Performance monitoring
        self.enable_performance_monitoring = os.getenv("ENABLE_PERFORMANCE_MONITORING", "true").lower() == "true"

        # Security
        self.enable_cors = os.getenv("ENABLE_CORS", "true").lower() == "true"
        self.cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")

        # Debug mode
        self.debug = os.getenv("DEBUG", "false").lower() == "true"

    def accepts_quantity(self, quantity: int) -> bool:
        return self.min_quantity <= quantity <= self.max_quantity

    def accepts_price(self, price: int) -> bool:
        return self.min_price <= price <= self.max_price

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            "max_order_count": self.max_order_count,
            "min_quantity": self.min_quantity,
            "max_quantity": self.max_quantity,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "rest_host": self.rest_host,
            "rest_port": self.rest_port,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "enable_performance_monitoring": self.enable_performance_monitoring,
            "enable_cors": self.enable_cors,
            "cors_origins": self.cors_origins,
            "debug": self.debug,
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        # Validate ports
        if not (1 <= self.rest_port <= 65535):
            errors.append(f"Invalid REST port: {self.rest_port}")

        # Validate auction limits
        if self.max_order_count <= 0:
            errors.append(f"Max order count must be positive: {self.max_order_count}")

        if self.min_quantity <= 0:
            errors.append(f"Min quantity must be positive: {self.min_quantity}")

        if self.max_quantity < self.min_quantity:
            errors.append(f"Max quantity must not be less than min quantity: {self.max_quantity} < {self.min_quantity}")

        if self.min_price <= 0:
            errors.append(f"Min price must be positive: {self.min_price}")

        if self.max_price < self.min_price:
            errors.append(f"Max price must not be less than min price: {self.max_price} < {self.min_price}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.validate()
    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from environment variables.

    Returns:
        New settings instance
    """
    global _settings
    _settings = Settings()
    _settings.validate()
    return _settings
