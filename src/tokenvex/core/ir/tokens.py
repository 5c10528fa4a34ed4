"""
Intermediate token document (DTCG flavoured).

The document is the format-agnostic hand-off between the serializer and
the converters: a mapping of collection name to a nested ``TokenGroup``
tree, optional style groups, and generation metadata. Cross-token
references stay as dotted ``$ref`` paths and are only resolved by
traversal when a converter renders them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..config import DTCG_SCHEMA_URL, EXTENSION_KEY
from ..errors import AmbiguousReferenceError, InputError, TokenTreeConflictError

logger = logging.getLogger(__name__)


class TokenType(StrEnum):
    """DTCG ``$type`` values emitted by the serializer."""

    COLOR = "color"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    TYPOGRAPHY = "typography"
    SHADOW = "shadow"
    GRID = "grid"


class _CompositeValue(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_dtcg(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude_none=True)
        return {key: _json_number(value) for key, value in data.items()}


class TypographyValue(_CompositeValue):
    font_family: str
    font_size: float
    font_weight: float = 400
    font_style: str | None = None
    line_height: str | None = None
    letter_spacing: str | None = None
    text_decoration: str | None = None
    text_transform: str | None = None


class ShadowValue(_CompositeValue):
    offset_x: float = 0
    offset_y: float = 0
    blur: float = 0
    spread: float = 0
    color: str
    type: Literal["dropShadow", "innerShadow"] = "dropShadow"


class GridValue(_CompositeValue):
    pattern: Literal["columns", "rows", "grid"]
    count: float | None = None
    section_size: float | None = None
    gutter_size: float = 0
    offset: float = 0


PrimitiveValue = bool | float | str | TypographyValue | ShadowValue | GridValue

_COMPOSITE_MODELS: dict[TokenType, type[_CompositeValue]] = {
    TokenType.TYPOGRAPHY: TypographyValue,
    TokenType.SHADOW: ShadowValue,
    TokenType.GRID: GridValue,
}
_COMPOSITE_MARKERS: dict[TokenType, str] = {
    TokenType.TYPOGRAPHY: "fontFamily",
    TokenType.SHADOW: "color",
    TokenType.GRID: "pattern",
}


# =============================================================================
# Token values
# =============================================================================


class Single(BaseModel):
    """One value shared by every mode."""

    kind: Literal["single"] = "single"
    value: PrimitiveValue

    model_config = ConfigDict(frozen=True)

    def to_dtcg(self) -> Any:
        if isinstance(self.value, _CompositeValue):
            return self.value.to_dtcg()
        return _json_number(self.value)


class Reference(BaseModel):
    """A pointer to another token as a dotted ``Collection.segment`` path."""

    kind: Literal["reference"] = "reference"
    path: str

    model_config = ConfigDict(frozen=True)

    def to_dtcg(self) -> dict[str, str]:
        return {"$ref": self.path}


ModeValue = Annotated[Single | Reference, Field(discriminator="kind")]


class PerMode(BaseModel):
    """Mode name to value mapping for collections with several modes."""

    kind: Literal["per_mode"] = "per_mode"
    values: dict[str, ModeValue]

    model_config = ConfigDict(frozen=True)

    def to_dtcg(self) -> dict[str, Any]:
        return {mode: value.to_dtcg() for mode, value in self.values.items()}


TokenValue = Annotated[Single | PerMode | Reference, Field(discriminator="kind")]


class TokenExtensions(BaseModel):
    """Tool-specific metadata kept under ``$extensions``."""

    unit: str | None = None
    resolved_type: str | None = None
    expression: str | None = None

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_dtcg(self) -> dict[str, Any]:
        return {EXTENSION_KEY: self.model_dump(by_alias=True, exclude_none=True)}


class Token(BaseModel):
    """A leaf of the token tree."""

    type: TokenType
    value: TokenValue
    description: str | None = None
    extensions: TokenExtensions | None = None

    model_config = ConfigDict(frozen=True)

    def to_dtcg(self) -> dict[str, Any]:
        data: dict[str, Any] = {"$type": self.type.value, "$value": self.value.to_dtcg()}
        if self.description:
            data["$description"] = self.description
        if self.extensions is not None:
            data["$extensions"] = self.extensions.to_dtcg()
        return data

    @classmethod
    def from_dtcg(cls, data: dict[str, Any]) -> Token:
        try:
            token_type = TokenType(data.get("$type", TokenType.STRING))
        except ValueError as e:
            raise InputError(f"Unknown token type: {data.get('$type')!r}") from e

        ext_data = (data.get("$extensions") or {}).get(EXTENSION_KEY)
        try:
            return cls(
                type=token_type,
                value=_parse_token_value(token_type, data.get("$value")),
                description=data.get("$description"),
                extensions=TokenExtensions.model_validate(ext_data) if ext_data else None,
            )
        except ValidationError as e:
            raise InputError(f"Invalid token value: {e}") from e

    # -- convenience --

    @property
    def mode_names(self) -> list[str]:
        if isinstance(self.value, PerMode):
            return list(self.value.values)
        return []

    def flat_value(self) -> Single | Reference | None:
        """The value to use when one flat value is required.

        Picks the mode named ``default`` (case-insensitive) or, failing that,
        the first mode.
        """
        if not isinstance(self.value, PerMode):
            return self.value
        for mode, value in self.value.values.items():
            if mode.lower() == "default":
                return value
        return next(iter(self.value.values.values()), None)


def _json_number(value: Any) -> Any:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def _parse_mode_value(token_type: TokenType, raw: Any) -> Single | Reference:
    if isinstance(raw, dict) and "$ref" in raw:
        return Reference(path=str(raw["$ref"]))
    model = _COMPOSITE_MODELS.get(token_type)
    if model is not None and isinstance(raw, dict):
        return Single(value=model.model_validate(raw))
    if raw is None:
        raise InputError("Token is missing $value")
    return Single(value=raw)


def _parse_token_value(token_type: TokenType, raw: Any) -> Single | PerMode | Reference:
    if isinstance(raw, dict) and "$ref" not in raw:
        marker = _COMPOSITE_MARKERS.get(token_type)
        if marker is None or marker not in raw:
            return PerMode(
                values={mode: _parse_mode_value(token_type, value) for mode, value in raw.items()}
            )
    return _parse_mode_value(token_type, raw)


# =============================================================================
# Token tree
# =============================================================================


class TokenGroup(BaseModel):
    """Nested path-keyed container; no key is both a token and a group."""

    children: dict[str, Token | TokenGroup] = Field(default_factory=dict)

    def insert(self, path: Sequence[str], token: Token) -> None:
        """Insert ``token`` at ``path``, creating intermediate groups.

        Raises:
            TokenTreeConflictError: If a segment is already a token, or the
                leaf key is already a group.
        """
        if not path:
            raise TokenTreeConflictError("Cannot insert a token at an empty path")

        node = self
        for depth, segment in enumerate(path[:-1]):
            child = node.children.get(segment)
            if child is None:
                child = TokenGroup()
                node.children[segment] = child
            elif isinstance(child, Token):
                raise TokenTreeConflictError(
                    f"'{'/'.join(path[: depth + 1])}' is a token and cannot contain "
                    f"'{'/'.join(path)}'"
                )
            node = child

        leaf = path[-1]
        existing = node.children.get(leaf)
        if isinstance(existing, TokenGroup):
            raise TokenTreeConflictError(
                f"'{'/'.join(path)}' is a group and cannot also be a token"
            )
        if existing is not None:
            logger.warning("Duplicate token path %s, keeping the last value", "/".join(path))
        node.children[leaf] = token

    def get(self, path: Sequence[str]) -> Token | TokenGroup | None:
        node: Token | TokenGroup = self
        for segment in path:
            if not isinstance(node, TokenGroup):
                return None
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def walk(self, prefix: Sequence[str] = ()) -> Iterator[tuple[list[str], Token]]:
        """Yield ``(path, token)`` for every leaf, depth first, in insertion order."""
        for key, child in self.children.items():
            path = [*prefix, key]
            if isinstance(child, Token):
                yield path, child
            else:
                yield from child.walk(path)

    def is_empty(self) -> bool:
        return not self.children

    def to_dtcg(self) -> dict[str, Any]:
        return {key: child.to_dtcg() for key, child in self.children.items()}

    @classmethod
    def from_dtcg(cls, data: dict[str, Any]) -> TokenGroup:
        group = cls()
        for key, child in data.items():
            if key.startswith("$"):
                continue
            if not isinstance(child, dict):
                raise InputError(f"Expected a token or group at '{key}'")
            if "$value" in child:
                group.children[key] = Token.from_dtcg(child)
            else:
                group.children[key] = cls.from_dtcg(child)
        return group


TokenGroup.model_rebuild()


class StyleGroups(BaseModel):
    """Serialized styles, one group per category."""

    paint: TokenGroup | None = None
    text: TokenGroup | None = None
    effect: TokenGroup | None = None
    grid: TokenGroup | None = None

    def items(self) -> Iterator[tuple[str, TokenGroup]]:
        for category in ("paint", "text", "effect", "grid"):
            group = getattr(self, category)
            if group is not None and not group.is_empty():
                yield category, group

    def is_empty(self) -> bool:
        return next(self.items(), None) is None


class DocumentMetadata(BaseModel):
    source_file: str = ""
    generated_at: str = Field(default="", description="ISO 8601 generation timestamp")

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Document(BaseModel):
    """Top-level token document."""

    collections: dict[str, TokenGroup] = Field(default_factory=dict)
    styles: StyleGroups | None = None
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    schema_url: str = DTCG_SCHEMA_URL

    def to_dtcg(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "$schema": self.schema_url,
            "collections": {name: group.to_dtcg() for name, group in self.collections.items()},
        }
        if self.styles is not None and not self.styles.is_empty():
            data["$styles"] = {category: group.to_dtcg() for category, group in self.styles.items()}
        data["$metadata"] = self.metadata.model_dump(by_alias=True)
        return data

    @classmethod
    def from_dtcg(cls, data: dict[str, Any]) -> Document:
        if not isinstance(data, dict) or not isinstance(data.get("collections"), dict):
            raise InputError("Token document must contain a 'collections' object")

        collections = {
            name: TokenGroup.from_dtcg(group) for name, group in data["collections"].items()
        }
        styles = None
        if isinstance(data.get("$styles"), dict):
            styles = StyleGroups(
                **{
                    category: TokenGroup.from_dtcg(group)
                    for category, group in data["$styles"].items()
                    if category in ("paint", "text", "effect", "grid")
                }
            )
        return cls(
            collections=collections,
            styles=styles,
            metadata=DocumentMetadata.model_validate(data.get("$metadata") or {}),
            schema_url=data.get("$schema", DTCG_SCHEMA_URL),
        )

    def is_empty(self) -> bool:
        no_tokens = all(group.is_empty() for group in self.collections.values())
        return no_tokens and (self.styles is None or self.styles.is_empty())

    # -- reference traversal --

    def resolve_reference(self, ref: str) -> list[str] | None:
        """Resolve a dotted ``$ref`` path to ``[collection, *segments]``.

        Collection and token names may themselves contain dots, so the path
        is matched against the tree rather than split blindly.
        """
        for name, group in self.collections.items():
            if ref == name:
                continue
            if ref.startswith(name + "."):
                found = _match_dotted(group, ref[len(name) + 1 :])
                if found is not None:
                    return [name, *found]
        return None

    def resolve_path(self, path: str) -> tuple[list[str], Token] | None:
        """Resolve a slash path (``Collection/name`` or a short ``name``).

        Raises:
            AmbiguousReferenceError: If a short name exists in several collections.
        """
        segments = path.split("/")
        if len(segments) > 1 and segments[0] in self.collections:
            node = self.collections[segments[0]].get(segments[1:])
            if isinstance(node, Token):
                return segments, node

        matches: list[tuple[list[str], Token]] = []
        for name, group in self.collections.items():
            node = group.get(segments)
            if isinstance(node, Token):
                matches.append(([name, *segments], node))
        if len(matches) > 1:
            raise AmbiguousReferenceError(path, [m[0][0] for m in matches])
        return matches[0] if matches else None


def _match_dotted(group: TokenGroup, remaining: str) -> list[str] | None:
    for key, child in group.children.items():
        if remaining == key and isinstance(child, Token):
            return [key]
        if remaining.startswith(key + ".") and isinstance(child, TokenGroup):
            rest = _match_dotted(child, remaining[len(key) + 1 :])
            if rest is not None:
                return [key, *rest]
    return None
