from .user import UserInput, UserParams

__all__ = ["UserInput", "UserParams"]
