from .endpoint import Endpoint, PersonEndpoint
from .exceptions import RecordNotFoundError
from .paths import PersonPaths

__all__ = ["Endpoint", "PersonEndpoint", "PersonPaths", "RecordNotFoundError"]
