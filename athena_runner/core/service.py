"""
Service configuration
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidRequest

DEFAULT_WORKGROUP = 'primary'

# camelCase keys accepted by from_dict
_KEY_ALIASES = {
    'accessKeyId': 'access_key_id',
    'secretAccessKey': 'secret_access_key',
    'outputLocation': 'output_location',
}


@dataclass(frozen=True)
class ServiceConfig:
    """
    Connection settings for the query service

    Immutable after construction. workgroup falls back to "primary" and
    catalog to None when they are not given.

    Attributes:
        region: AWS region name
        access_key_id: Static access key (None uses the default credential chain)
        secret_access_key: Static secret key
        database: Default database for executions
        workgroup: Workgroup executions run under
        catalog: Optional data catalog name
        output_location: Optional S3 location for result files
    """
    region: str
    database: str
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    workgroup: Optional[str] = DEFAULT_WORKGROUP
    catalog: Optional[str] = None
    output_location: Optional[str] = None

    def __post_init__(self):
        if self.workgroup is None:
            object.__setattr__(self, 'workgroup', DEFAULT_WORKGROUP)
        if not self.region:
            raise InvalidRequest("Service config requires a region")
        if not self.database:
            raise InvalidRequest("Service config requires a database")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ServiceConfig':
        """
        Build a config from a plain mapping

        Args:
            data: Mapping with snake_case or camelCase keys; unknown keys are ignored

        Returns:
            ServiceConfig
        """
        fields = set(cls.__dataclass_fields__)
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            key = _KEY_ALIASES.get(key, key)
            if key in fields:
                kwargs[key] = value
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise InvalidRequest(f"Incomplete service config: {e}") from e

    @classmethod
    def from_config(cls, config) -> 'ServiceConfig':
        """Build from the 'athena' section of a Config"""
        return cls.from_dict(config.get('athena', {}))

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)
