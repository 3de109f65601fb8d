"""Environment validation package."""

from kharch_baant.validation.validator import ConfigValidator, ConfigurationSetError

__all__ = ["ConfigValidator", "ConfigurationSetError"]
