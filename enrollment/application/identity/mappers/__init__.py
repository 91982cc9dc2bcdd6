from .create_user_mapper import CreateUserMapper

__all__ = ["CreateUserMapper"]
