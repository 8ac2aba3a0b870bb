"""Ownership configuration model.

The ownership file lives in the target repository and is always read at the
pull request's base ref. Expected format::

    components:
      docs:
        reviewers: [alice]
        approvers: [bob]
      src/api:
        reviewers: [carol, dave]
    ignored-authors:
      - dependabot[bot]

Every key is optional; unknown keys are rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import yaml

from reviewflow_core.errors import ConfigInvalidError

_TOP_LEVEL_KEYS = ("components", "ignored-authors")
_OWNER_KEYS = ("reviewers", "approvers")

_BOOL_TAG = "tag:yaml.org,2002:bool"
_STR_TAG = "tag:yaml.org,2002:str"


class _OwnershipLoader(yaml.SafeLoader):
    """SafeLoader that keeps component names and logins as written.

    Scalar mapping keys always load as strings (a `2024:` directory stays
    "2024"), and only true/false are booleans, so logins such as `no` or
    `on` stay strings.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            for key_node, _ in node.value:
                if isinstance(key_node, yaml.ScalarNode):
                    key_node.tag = _STR_TAG
        return super().construct_mapping(node, deep=deep)


_OwnershipLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_OwnershipLoader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)


@dataclass(frozen=True)
class Owners:
    reviewers: tuple[str, ...] = ()
    approvers: tuple[str, ...] = ()


@dataclass(frozen=True)
class OwnershipConfig:
    """Parsed ownership file.

    ``components`` keeps document order; the resolver walks it in that order.
    ``ignored_authors`` is parsed but not consulted by any transition yet.
    """

    components: dict[str, Owners] = field(default_factory=dict)
    ignored_authors: frozenset[str] = frozenset()


def _check_keys(data: dict, allowed: tuple[str, ...], location: str) -> None:
    unknown = [k for k in data if k not in allowed]
    if unknown:
        raise ConfigInvalidError(f"unrecognized key(s): {', '.join(map(str, unknown))}", location)


def _string_list(value, location: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigInvalidError(f"expected a list of strings, got {type(value).__name__}", location)
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigInvalidError(f"expected a string, got {type(item).__name__}", f"{location}[{i}]")
    return tuple(value)


def _parse_owners(name: str, body) -> Owners:
    location = f"components.{name}"
    if not isinstance(body, dict):
        raise ConfigInvalidError(f"expected a mapping, got {type(body).__name__}", location)
    _check_keys(body, _OWNER_KEYS, location)
    return Owners(
        reviewers=_string_list(body.get("reviewers"), f"{location}.reviewers"),
        approvers=_string_list(body.get("approvers"), f"{location}.approvers"),
    )


def parse_config(raw: bytes | str) -> OwnershipConfig:
    """Parse and validate the raw ownership file.

    Raises ConfigInvalidError for undecodable bytes, YAML syntax errors and
    any schema violation. Missing optional keys fall back to empty values.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigInvalidError(f"not valid UTF-8: {e}")

    try:
        data = yaml.load(raw, Loader=_OwnershipLoader)
    except yaml.YAMLError as e:
        raise ConfigInvalidError(f"invalid YAML: {e}")

    if data is None:
        return OwnershipConfig()
    if not isinstance(data, dict):
        raise ConfigInvalidError(f"expected a mapping at the top level, got {type(data).__name__}")
    _check_keys(data, _TOP_LEVEL_KEYS, "config")

    raw_components = data.get("components")
    if raw_components is None:
        raw_components = {}
    if not isinstance(raw_components, dict):
        raise ConfigInvalidError(f"expected a mapping, got {type(raw_components).__name__}", "components")

    components: dict[str, Owners] = {}
    for name, body in raw_components.items():
        if not isinstance(name, str):
            raise ConfigInvalidError(f"component names must be strings, got {name!r}", "components")
        components[name] = _parse_owners(name, body)

    ignored = _string_list(data.get("ignored-authors"), "ignored-authors")
    return OwnershipConfig(components=components, ignored_authors=frozenset(ignored))


def dump_config(config: OwnershipConfig) -> str:
    """Serialize a config back to the YAML form parse_config reads."""
    data = {
        "components": {
            name: {"reviewers": list(owners.reviewers), "approvers": list(owners.approvers)}
            for name, owners in config.components.items()
        },
        "ignored-authors": sorted(config.ignored_authors),
    }
    return yaml.safe_dump(data, sort_keys=False)
