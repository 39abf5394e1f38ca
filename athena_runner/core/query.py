"""
Query request model
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import InvalidRequest

# Accepted spellings of the max age key in a reuse mapping
MAX_AGE_KEYS = ('max_age_minutes', 'maxAgeMinutes', 'maxAgeInMinutes')


@dataclass(frozen=True)
class ReusePolicy:
    """
    Result reuse policy

    Tells the service to return a previous result for an identical query
    if that result is newer than max_age_minutes.

    Attributes:
        enabled: Whether result reuse is requested
        max_age_minutes: Maximum age of a reusable result (minutes)
    """
    enabled: bool = False
    max_age_minutes: int = 0

    @classmethod
    def disabled(cls) -> 'ReusePolicy':
        """Explicit default used when a request carries no policy"""
        return cls(enabled=False, max_age_minutes=0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ReusePolicy':
        """
        Build a policy from a plain mapping

        Args:
            data: Mapping with "enabled" and one of the max age keys

        Returns:
            ReusePolicy

        Raises:
            InvalidRequest: On unknown keys, several age keys or a non-boolean "enabled"
        """
        unknown = set(data) - {'enabled', *MAX_AGE_KEYS}
        if unknown:
            raise InvalidRequest(f"Unknown reuse policy keys: {sorted(unknown)}")

        age_keys = [key for key in MAX_AGE_KEYS if key in data]
        if len(age_keys) > 1:
            raise InvalidRequest(f"Reuse policy has more than one max age key: {age_keys}")

        return cls(
            enabled=parse_enabled(data.get('enabled', False)),
            max_age_minutes=data[age_keys[0]] if age_keys else 0,
        )


@dataclass
class QueryRequest:
    """
    A single query submission

    Attributes:
        query: SQL text to execute
        reuse: Optional result reuse policy
    """
    query: str
    reuse: Optional[ReusePolicy] = None

    @property
    def effective_reuse(self) -> ReusePolicy:
        """Reuse policy with the disabled default filled in"""
        if self.reuse is None:
            return ReusePolicy.disabled()
        return self.reuse


def parse_enabled(value: Any) -> bool:
    """Strict boolean parsing: real bools or the strings "true"/"false" only"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
        return value.strip().lower() == 'true'
    raise InvalidRequest(f"Reuse policy 'enabled' must be a boolean, got {value!r}")
