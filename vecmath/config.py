# vecmath/config.py
"""
Library-wide numeric policy and defaults.
"""

from dataclasses import dataclass, replace


ZERO_LENGTH_POLICIES = ("zero", "propagate", "raise")


@dataclass(frozen=True)
class MathConfig:
    """
    Numeric edge-case policy shared by every operation.

    Attributes:
    -----------
    zero_length_policy : str
        What normalize() does with a zero-length vector:
        - "zero":      return the zero vector (default)
        - "propagate": divide anyway and let IEEE-754 nan flow through
        - "raise":     raise ZeroLengthError
        The sphere, line, ray and degenerate segment queries inherit it.

    approx_epsilon : float
        Tolerance used by approx() when no epsilon is passed.
    """

    zero_length_policy: str = "zero"
    approx_epsilon: float = 1e-6

    def __post_init__(self):
        if self.zero_length_policy not in ZERO_LENGTH_POLICIES:
            raise ValueError(
                f"zero_length_policy must be one of {ZERO_LENGTH_POLICIES}, "
                f"got {self.zero_length_policy!r}"
            )
        if not self.approx_epsilon > 0.0:
            raise ValueError(f"approx_epsilon must be positive, got {self.approx_epsilon}")


# Global config instance
CONFIG = MathConfig()


def configure(**changes) -> MathConfig:
    """
    Replace the global config with a copy carrying `changes`.

    Meant to be called once at start-up; returns the previous config so
    callers (and tests) can restore it with `restore(previous)`.
    """
    global CONFIG
    previous = CONFIG
    CONFIG = replace(CONFIG, **changes)
    return previous


def restore(config: MathConfig) -> None:
    global CONFIG
    CONFIG = config


def get_config() -> MathConfig:
    return CONFIG
