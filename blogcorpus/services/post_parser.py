import datetime
import logging
import re
from collections.abc import Hashable
from typing import Any, List, Optional, Tuple

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from blogcorpus.errors import (
    InvalidField,
    MalformedDate,
    MalformedHeader,
    MalformedTags,
    MissingField,
    PostError,
    UnknownField,
)
from blogcorpus.schemas.post import Post

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "date")
OPTIONAL_FIELDS = ("tags",)
KNOWN_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

_handler = YAMLHandler()
_TZ_SPACING = re.compile(r"\s+(Z|[+-]\d{2}(?::?\d{2})?)$", re.IGNORECASE)
_OFFSET = re.compile(r"(:\d{2}(?:\.\d+)?)([+-]\d{2}):?(\d{2})?$")
_FRACTION = re.compile(r"\.(\d+)")


class _HeaderLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as text and refuses repeated keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


_HeaderLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_scalar
)


def split_header(text: str) -> Tuple[str, str]:
    """Split raw post text into (header, body) on the `---` delimiter lines."""
    text = text.lstrip("\ufeff").lstrip()
    if not _handler.detect(text):
        raise MalformedHeader("missing opening header delimiter")
    try:
        header, body = _handler.split(text)
    except ValueError:
        raise MalformedHeader("missing closing header delimiter") from None
    return header, body


def parse_post(text: str, identifier: Optional[str] = None) -> Post:
    """Parse header + body text into a validated Post, raising a PostError subclass otherwise."""
    try:
        header, body = split_header(text)
        metadata = _load_header(header)

        unknown = [key for key in metadata if key not in KNOWN_FIELDS]
        if unknown:
            raise UnknownField(str(unknown[0]))

        for name in REQUIRED_FIELDS:
            if _is_blank(metadata.get(name)):
                raise MissingField(name)

        return Post(
            title=_require_text(metadata, "title"),
            description=_require_text(metadata, "description"),
            date=parse_date(metadata["date"]),
            tags=parse_tags(metadata.get("tags")),
            body=body,
        )
    except PostError as e:
        raise e.with_identifier(identifier)


def dump_post(post: Post) -> str:
    """Encode a Post back into header + body text that parse_post accepts."""
    metadata = {
        "title": post.title,
        "description": post.description,
        "date": post.date.isoformat(),
    }
    if post.tags:
        metadata["tags"] = list(post.tags)

    document = frontmatter.Post(post.body, handler=_handler, **metadata)
    return frontmatter.dumps(document, sort_keys=False).rstrip("\n") + "\n"


def parse_date(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, str):
        raw = _TZ_SPACING.sub(r"\1", value.strip())
        if raw[-1:] in ("Z", "z"):
            raw = raw[:-1] + "+00:00"
        raw = _OFFSET.sub(lambda m: f"{m[1]}{m[2]}:{m[3] or '00'}", raw)
        raw = _FRACTION.sub(lambda m: "." + m[1][:6].ljust(6, "0"), raw)
        try:
            parsed = datetime.datetime.fromisoformat(raw)
        except ValueError:
            raise MalformedDate(f"cannot parse date {value!r}") from None
    else:
        raise MalformedDate(f"date must be a timestamp, got {type(value).__name__}")

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise MalformedDate(f"date {value!r} has no timezone offset")
    return parsed


def parse_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedTags(
            f"tags must be a list of strings, got {type(value).__name__}"
        )
    bad = [item for item in value if not isinstance(item, str)]
    if bad:
        raise MalformedTags(f"tags must be strings, got {bad[0]!r}")
    if len(set(value)) != len(value):
        logger.debug(f"Duplicate tags kept as authored: {value}")
    return list(value)


def _load_header(header: str) -> dict:
    try:
        metadata = _handler.load(header, Loader=_HeaderLoader)
    except yaml.YAMLError as e:
        raise MalformedHeader(f"header is not valid YAML: {e}") from None
    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise MalformedHeader(
            f"header must be a mapping of fields, got {type(metadata).__name__}"
        )
    return metadata


def _require_text(metadata: dict, name: str) -> str:
    value = metadata[name]
    if not isinstance(value, str):
        raise InvalidField(
            name, f"field '{name}' must be text, got {type(value).__name__}"
        )
    return value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
