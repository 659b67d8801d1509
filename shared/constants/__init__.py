from .environments import Environment
from .redis_keys import RedisKeys

__all__ = ["Environment", "RedisKeys"]
