"""Base classes for models and schemas."""

import json
import logging
from abc import ABC
from typing import Mapping, Union

from marshmallow import Schema, ValidationError, post_dump, post_load

from ...core.error import BaseError
from . import resolve_class, resolve_meta_property

LOGGER = logging.getLogger(__name__)


class BaseModelError(BaseError):
    """Base exception class for base model errors."""


class BaseModel(ABC):
    """Base model that provides convenience methods."""

    class Meta:
        """BaseModel meta data."""

        schema_class = None

    def __init__(self):
        """Initialize BaseModel.

        Raises:
            TypeError: If schema_class is not set on Meta

        """
        if not self.Meta.schema_class:
            raise TypeError(
                "Can't instantiate abstract class {} with no schema_class".format(
                    self.__class__.__name__
                )
            )

    @classmethod
    def _get_schema_class(cls) -> type:
        """Get the schema class."""
        return resolve_class(cls.Meta.schema_class, cls)

    @property
    def Schema(self) -> type:
        """Accessor for the model's schema class."""
        return self._get_schema_class()

    @classmethod
    def deserialize(cls, obj: Union[Mapping, str], *, unknown: str = None):
        """Convert from JSON representation to a model instance.

        Args:
            obj: The dict or JSON string to load into a model instance
            unknown: Behaviour for unknown attributes

        Returns:
            A model instance for this data

        """
        if isinstance(obj, str):
            obj = json.loads(obj)
        schema_cls = cls._get_schema_class()
        schema = schema_cls(unknown=unknown) if unknown else schema_cls()
        try:
            return schema.load(obj)
        except ValidationError as err:
            LOGGER.exception("%s message validation error:", cls.__name__)
            raise BaseModelError(f"{cls.__name__} schema validation failed") from err

    def serialize(self, *, as_string: bool = False) -> Union[dict, str]:
        """Create a JSON-compatible dict representation of the model instance.

        Args:
            as_string: Return a string of JSON instead of a dict

        Returns:
            A dict representation of this model, or a JSON string if as_string is True

        """
        try:
            dumped = self.Schema().dump(self)
        except (AttributeError, TypeError, ValueError) as err:
            LOGGER.exception("%s message serialization error:", self.__class__.__name__)
            raise BaseModelError(
                f"{self.__class__.__name__} schema validation failed"
            ) from err
        return json.dumps(dumped) if as_string else dumped

    def validate(self):
        """Validate a constructed model."""
        schema = self.Schema()
        errors = schema.validate(self.serialize())
        if errors:
            raise ValidationError(errors)
        return self

    def to_json(self) -> str:
        """Return a JSON representation of the model."""
        return self.serialize(as_string=True)

    @classmethod
    def from_json(cls, json_repr: Union[str, bytes]):
        """Parse a JSON string into a model instance."""
        try:
            parsed = json.loads(json_repr)
        except ValueError as err:
            LOGGER.exception("%s message parse error:", cls.__name__)
            raise BaseModelError(f"{cls.__name__} JSON parsing failed") from err
        return cls.deserialize(parsed)

    def __eq__(self, other) -> bool:
        """Compare models by serialized value."""
        if type(other) is not type(self):
            return False
        return self.serialize() == other.serialize()

    def __repr__(self) -> str:
        """Return a human readable representation of this class."""
        exclude = resolve_meta_property(self, "repr_exclude", ())
        items = (
            "{}={}".format(k, repr(v))
            for k, v in self.__dict__.items()
            if k.lstrip("_") not in exclude
        )
        return "<{}({})>".format(self.__class__.__name__, ", ".join(items))


class BaseModelSchema(Schema):
    """BaseModel schema."""

    class Meta:
        """BaseModelSchema metadata."""

        model_class = None
        skip_values = [None]

    def __init__(self, *args, **kwargs):
        """Initialize BaseModelSchema.

        Raises:
            TypeError: If model_class is not set on Meta

        """
        super().__init__(*args, **kwargs)
        if not self.Meta.model_class:
            raise TypeError(
                "Can't instantiate abstract class {} with no model_class".format(
                    self.__class__.__name__
                )
            )

    @classmethod
    def _get_model_class(cls) -> type:
        """Get the model class."""
        return resolve_class(cls.Meta.model_class, cls)

    @property
    def Model(self) -> type:
        """Accessor for the schema's model class."""
        return self._get_model_class()

    @post_load
    def make_model(self, data: dict, **kwargs):
        """Return model instance after loading."""
        return self.Model(**data)

    @post_dump
    def remove_skipped_values(self, data, **kwargs):
        """Remove values that are are marked to skip."""
        skip_vals = resolve_meta_property(self, "skip_values", [])
        return {key: value for key, value in data.items() if value not in skip_vals}
