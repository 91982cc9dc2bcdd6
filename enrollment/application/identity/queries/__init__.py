from .does_user_exist import DoesUserExistHandler, DoesUserExistQuery

__all__ = ["DoesUserExistHandler", "DoesUserExistQuery"]
