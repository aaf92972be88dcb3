"""Codec for the legacy protocol, where metadata is a list of typed properties."""

from collections.abc import Mapping
from typing import Any

from ..errors import GuardError
from ..models import (
    AliasInput,
    ChangesetVerification,
    Property,
    ProtocolVersion,
    QueryOptions,
    ResponseType,
)
from ..rest.client import MIME_JSON
from .base import compact
from .json_ld import JsonLdCodec


class PropertiesCodec(JsonLdCodec):
    """Legacy protocol.

    Same element naming as the JSON-LD protocol, but metadata is a list of
    ``{key, type, value}`` properties, there is no content negotiation, the
    get response wraps the vertex in ``{vertex, verified, verification}``
    with results keyed by epoch, and the list filter is ``idOrAlias``/``mode``.
    """

    version = ProtocolVersion.PROPERTIES

    def accept_header(self, response_type: ResponseType | None = None) -> str | None:
        return MIME_JSON

    def _encode_metadata(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, bytes)) or isinstance(value, Mapping):
            raise GuardError(
                self.source,
                "metadata",
                value,
                message=f"{self.source}: metadata must be a list of properties",
            )

        properties = []
        for item in value:
            if isinstance(item, Property):
                properties.append({"key": item.key, "type": item.type, "value": item.value})
            elif isinstance(item, Mapping) and "key" in item:
                properties.append(dict(item))
            else:
                raise GuardError(
                    self.source,
                    "metadata",
                    item,
                    message=f"{self.source}: metadata entries must be properties with a key",
                )
        return properties

    def _encode_alias(self, alias: AliasInput) -> dict[str, Any]:
        return compact(
            {
                "id": alias.id,
                "metadata": self._encode_metadata(alias.annotation_object),
            }
        )

    def _encode_id_filter(self, options: QueryOptions | None) -> dict[str, Any]:
        if options is None:
            return {}
        return compact(
            {
                "idOrAlias": options.id,
                "mode": options.id_mode.value if options.id_mode is not None else None,
            }
        )

    def _decode_metadata(self, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [
            Property(key=item.get("key"), type=item.get("type"), value=item.get("value"))
            if isinstance(item, Mapping)
            else item
            for item in value
        ]

    def _unwrap_vertex(self, body: Any) -> tuple[Mapping[str, Any], Mapping[str, Any]]:
        data = self._require_object(body, "vertex")
        vertex = data.get("vertex")
        if isinstance(vertex, Mapping):
            return vertex, data
        return data, data

    def _decode_verification(
        self, data: Mapping[str, Any]
    ) -> dict[int | str, ChangesetVerification] | None:
        return self._decode_epoch_verification(data.get("verification"))
