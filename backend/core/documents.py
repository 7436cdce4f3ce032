"""
Typed reads from a DocumentStore.

Stored documents are untyped JSON; this is where they become domain models.
A record that fails validation is logged and skipped rather than raised, so a
single corrupt entry cannot take the rest of the collection down with it.
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_document(
    item: Dict[str, Any],
    model: Type[M],
) -> Optional[M]:
    """Validate one stored document, returning None if it is malformed."""
    try:
        return model.model_validate(item)
    except ValidationError as e:
        logger.warning(
            f"Skipping malformed {model.__name__} record: {e.error_count()} error(s)"
        )
        return None


def parse_documents(
    items: List[Dict[str, Any]],
    model: Type[M],
) -> List[M]:
    """Validate every stored document, dropping malformed ones."""
    parsed = (parse_document(item, model) for item in items)
    return [record for record in parsed if record is not None]


def dump_documents(records: List[BaseModel]) -> List[Dict[str, Any]]:
    """Serialize models to JSON-compatible dicts for save_all()."""
    return [record.model_dump(mode="json") for record in records]
