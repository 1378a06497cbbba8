from enum import Enum


class Environment(str, Enum):
    """Environment profiles."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class TokenCounterType(str, Enum):
    """Token counter implementations."""

    TIKTOKEN = "tiktoken"
    CHAR_ESTIMATE = "char_estimate"


class RateLimiterBackend(str, Enum):
    """Rate limit window storage backends."""

    REDIS = "redis"
    MEMORY = "memory"


class BankDataEnvironment(str, Enum):
    """Plaid environments."""

    SANDBOX = "sandbox"
    PRODUCTION = "production"


# Linked bank institutions allowed per billing customer
MAX_LINKED_INSTITUTIONS = 5
