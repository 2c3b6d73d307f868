from uuid import UUID

from app.exceptions import EntityNotFoundError


def parse_entity_id(value: str, entity: str) -> UUID:
    """
    Parse an id taken from a URL path.

    Ids are opaque to callers, so a value that is not a UUID cannot name an existing
    entity and is reported as not found rather than as a malformed request.
    """
    try:
        return UUID(value)
    except ValueError:
        raise EntityNotFoundError(f"{entity} not found", entity_id=value)
