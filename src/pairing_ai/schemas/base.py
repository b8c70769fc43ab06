"""Base schema configuration for all Pydantic models.

Fields are snake_case in Python and camelCase on the wire, matching the
front-end/BFF contract (``selectedWineIds``, ``recommendedCheeseIds``, ...).

Usage:
    - APIRequest: incoming API request bodies
    - APIResponse: outgoing API response bodies
    - DownstreamResponse: payloads received from collaborators (catalog, LLM)
    - StoredDocument: records persisted in the audit log store
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Unknown properties sent by the BFF are ignored.
    """

    model_config = ConfigDict(extra="ignore")


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas."""

    model_config = ConfigDict(extra="forbid")


class DownstreamResponse(_BaseSchema):
    """Base class for payloads received from external services.

    Upstream services may add properties; that must not break parsing.
    """

    model_config = ConfigDict(extra="ignore")


class StoredDocument(_BaseSchema):
    """Base class for documents written to the audit log store.

    Extra keys are ignored so older or newer documents stay readable.
    """

    model_config = ConfigDict(extra="ignore")
