from typing import Dict, List, Optional

from pydantic import BaseModel

ValidationErrors = Dict[str, List[str]]


def _add(errors: ValidationErrors, field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def body_errors(body: Optional[BaseModel]) -> ValidationErrors:
    errors: ValidationErrors = {}
    if body is None:
        _add(errors, "body", "A request body is required.")
    return errors


def update_errors(path_id: int, body: Optional[BaseModel]) -> ValidationErrors:
    """Reglas de un PUT: id de ruta positivo y el mismo id en el body."""
    errors = body_errors(body)
    if path_id < 1:
        _add(errors, "id", "The id in the path must be a positive integer.")
    if body is not None:
        if body.id is None:
            _add(errors, "id", "The request body must include the id.")
        elif body.id != path_id:
            _add(errors, "id", f"Body id {body.id} does not match path id {path_id}.")
    return errors
