"""Helpers shared by the workflow modules"""
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from mentorhub.core.exceptions import InvalidInputError, NotFoundError
from mentorhub.persistence.port import Entity, Filters, PersistencePort, sort_key

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def describe_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Render pydantic error dicts as ``location: message`` strings."""
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def parse_input(schema: Type[SchemaType], data: Union[SchemaType, Dict[str, Any]]) -> SchemaType:
    """Validate caller input, reporting problems as ``InvalidInputError``."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise InvalidInputError("; ".join(describe_errors(exc.errors()))) from exc


def provided_fields(data: Union[BaseModel, Dict[str, Any]]) -> set:
    """Names of the fields a caller explicitly sent."""
    if isinstance(data, BaseModel):
        return set(data.model_fields_set)
    return set(data)


def get_or_404(store: PersistencePort, entity: Entity, id: str, label: str):
    record = store.get(entity, id)
    if record is None:
        raise NotFoundError(f"{label} not found")
    return record


def find_any(
    store: PersistencePort, entity: Entity, filter_list: List[Filters], order_by: Optional[str] = None
) -> List[BaseModel]:
    """Union of the records matching any filter in ``filter_list``."""
    records: Dict[str, BaseModel] = {}
    for filters in filter_list:
        for record in store.find(entity, filters, order_by):
            records.setdefault(record.id, record)

    results = list(records.values())
    field, descending = sort_key(order_by)
    if field and len(filter_list) > 1:
        results.sort(key=lambda record: getattr(record, field), reverse=descending)
    return results
