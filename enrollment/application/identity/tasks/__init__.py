from .create_user_task import CREATE_USER_TASK, CreateUserTask

__all__ = ["CREATE_USER_TASK", "CreateUserTask"]
