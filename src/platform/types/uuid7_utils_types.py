"""
https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__

uuid_utils.UUID as a pydantic field type.

Entities carry uuid_utils.UUID (uuid7 ids), asyncpg hands back stdlib uuid.UUID.
`to_uuid7` normalizes both, `UtilsUUID7` lets request/response schemas declare
the type so FastAPI validates strings and serializes back to strings.
"""

import uuid
from typing import Any, Union

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


def to_uuid7(value: Union[str, uuid.UUID, UUID]) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as e:
        raise ValueError(f'Invalid UUID: {value}') from e


def to_std_uuid(value: Union[str, uuid.UUID, UUID]) -> uuid.UUID:
    """asyncpg binds stdlib UUIDs only"""
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # JSON has no UUID type: JSON mode takes strings only, Python mode also
        # accepts UUID objects. plain_validator alone cannot produce a JSON schema.
        from_str = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(to_uuid7),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(UUID),
                    core_schema.chain_schema(
                        [
                            core_schema.is_instance_schema(uuid.UUID),
                            core_schema.no_info_plain_validator_function(to_uuid7),
                        ]
                    ),
                    from_str,
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used='always', return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {'type': 'string', 'format': 'uuid'}
