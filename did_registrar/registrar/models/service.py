"""DID document service endpoints."""

from typing import Optional, Union

from marshmallow import EXCLUDE, fields

from ...messaging.models.base import BaseModel, BaseModelSchema


class Service(BaseModel):
    """Service endpoint of a DID document."""

    class Meta:
        """Service metadata."""

        schema_class = "ServiceSchema"

    def __init__(
        self,
        *,
        id: str,
        type: str,
        service_endpoint: Union[str, dict, list],
        description: Optional[str] = None,
    ):
        """Initialize a Service."""
        super().__init__()
        self.id = id
        self.type = type
        self.service_endpoint = service_endpoint
        self.description = description


class ServiceSchema(BaseModelSchema):
    """Service schema."""

    class Meta:
        """ServiceSchema metadata."""

        model_class = Service
        unknown = EXCLUDE

    id = fields.Str(required=True, metadata={"description": "Service identifier"})
    type = fields.Str(required=True, metadata={"description": "Service type"})
    service_endpoint = fields.Raw(
        required=True,
        data_key="serviceEndpoint",
        metadata={"description": "Service endpoint URL, map or set"},
    )
    description = fields.Str(required=False, allow_none=True)
