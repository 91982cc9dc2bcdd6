from .create_user_validator import CreateUserValidator

__all__ = ["CreateUserValidator"]
