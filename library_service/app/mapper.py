"""
library_service/app/mapper.py

Traducción declarativa y bidireccional entre entidades (SQLAlchemy) y DTOs
(pydantic).

Cada regla se registra una sola vez con create_map(Entidad, DTO) y sirve en
ambos sentidos. La tabla de correspondencia de campos se calcula al registrar:
son los campos del DTO que también existen en la entidad (mismo nombre). Los
campos que solo están en un lado quedan con su valor por defecto; por ejemplo
AuthorCreateDTO no tiene id, así que el Author resultante sale sin id.

Las relaciones (Author.books <-> AuthorDTO.books) se traducen elemento a
elemento con la regla registrada para el par de tipos anidado.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, get_args

from pydantic import BaseModel
from sqlalchemy import inspect


class MappingError(Exception):
    pass


@dataclass(frozen=True)
class FieldRule:
    name: str
    # Solo para relaciones: tipos de los elementos a cada lado
    entity_type: Optional[type] = None
    dto_type: Optional[type] = None
    many: bool = False

    @property
    def nested(self) -> bool:
        return self.entity_type is not None


@dataclass(frozen=True)
class MapRule:
    entity_type: type
    dto_type: type
    fields: Tuple[FieldRule, ...]

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


def _nested_model(annotation: Any) -> Optional[Type[BaseModel]]:
    # List[BookDTO], Optional[BookDTO]... -> BookDTO
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    for arg in get_args(annotation):
        found = _nested_model(arg)
        if found is not None:
            return found
    return None


def _correspondence(entity_type: type, dto_type: Type[BaseModel]) -> Tuple[FieldRule, ...]:
    mapper = inspect(entity_type)
    attrs = set(mapper.attrs.keys())
    relationships = mapper.relationships

    rules = []
    for name, info in dto_type.model_fields.items():
        if name not in attrs:
            continue
        if name in relationships:
            nested_dto = _nested_model(info.annotation)
            if nested_dto is None:
                raise MappingError(
                    f"{dto_type.__name__}.{name} does not declare a model type for "
                    f"relationship {entity_type.__name__}.{name}"
                )
            rel = relationships[name]
            rules.append(FieldRule(name, rel.mapper.class_, nested_dto, bool(rel.uselist)))
        else:
            rules.append(FieldRule(name))
    return tuple(rules)


class Mapper:
    """Registro de reglas Entidad <-> DTO."""

    def __init__(self):
        self._rules: Dict[Tuple[type, type], MapRule] = {}

    def create_map(self, entity_type: type, dto_type: Type[BaseModel]) -> MapRule:
        rule = MapRule(entity_type, dto_type, _correspondence(entity_type, dto_type))
        self._rules[(entity_type, dto_type)] = rule
        self._rules[(dto_type, entity_type)] = rule
        return rule

    def has_map(self, source_type: type, dest_type: type) -> bool:
        return (source_type, dest_type) in self._rules

    def rule_for(self, source_type: type, dest_type: type) -> MapRule:
        try:
            return self._rules[(source_type, dest_type)]
        except KeyError:
            raise MappingError(
                f"No mapping registered from {source_type.__name__} to {dest_type.__name__}"
            ) from None

    def map(self, source: Any, dest_type: type) -> Any:
        rule = self.rule_for(type(source), dest_type)
        if dest_type is rule.dto_type:
            return self._to_dto(source, rule)
        return self._to_entity(source, rule)

    def map_many(self, sources: Iterable[Any], dest_type: type) -> List[Any]:
        return [self.map(source, dest_type) for source in sources]

    def _nested(self, value: Any, field: FieldRule, dest_type: type) -> Any:
        if value is None:
            return None
        if field.many:
            return self.map_many(value, dest_type)
        return self.map(value, dest_type)

    def _to_dto(self, entity: Any, rule: MapRule) -> BaseModel:
        values = {}
        for field in rule.fields:
            value = getattr(entity, field.name)
            if field.nested:
                value = self._nested(value, field, field.dto_type)
            values[field.name] = value
        return rule.dto_type(**values)

    def _to_entity(self, dto: BaseModel, rule: MapRule) -> Any:
        values = {}
        for field in rule.fields:
            value = getattr(dto, field.name)
            if field.nested:
                value = self._nested(value, field, field.entity_type)
                if value is None and field.many:
                    continue
            values[field.name] = value
        return rule.entity_type(**values)
