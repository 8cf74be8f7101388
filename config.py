"""
Stack configuration loaded from pulumi.Config().

Provides a typed, immutable view of stack settings. All settings are read from
Pulumi config (e.g. Pulumi.<stack>.yaml or pulumi config set). Only ``name``
and ``domain`` are required; structured keys (redirects, proxies, CSP) are
YAML objects set with ``pulumi config set --path``. Used by __main__.main()
to build the StaticSite recipe.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

import pulumi


def _require_str(config: pulumi.Config, key: str) -> str:
    return config.require(key)


def _get_str(config: pulumi.Config, key: str) -> str | None:
    return config.get(key) or None


def _get_team(config: pulumi.Config, key: str) -> str:
    return config.get(key) or "default"


def _get_list(config: pulumi.Config, key: str) -> list[str]:
    raw = config.get_object(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"config '{key}' must be a list, got {type(raw).__name__}")
    return [str(item) for item in raw if item]


def _get_mapping(config: pulumi.Config, key: str) -> dict[str, Any]:
    raw = config.get_object(key)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"config '{key}' must be a mapping, got {type(raw).__name__}")
    return dict(raw)


# (key, parser); parser receives (config, key) and returns value.
_CONFIG_SPEC: list[tuple[str, Callable[[pulumi.Config, str], Any]]] = [
    ("name", _require_str),
    ("domain", _require_str),
    ("additional_domains", _get_list),
    ("content_routing_rules", _get_mapping),
    ("content_proxy", _get_mapping),
    ("content_security_policy", _get_mapping),
    ("certificate_arn", _get_str),
    ("cloudflare_zone_id", _get_str),
    ("team", _get_team),
]


@dataclass(frozen=True)
class SiteConfig:
    """
    Stack configuration from Pulumi config.

    Attributes:
        name: Service name, used as subdomain and resource prefix (required).
        domain: TLD domain the service is published under (required).
        additional_domains: Extra hosts for the distribution.
        content_routing_rules: Redirect map ``{"/<prefix>/*": target}``.
        content_proxy: Proxied paths ``{path pattern: URL or {origin, *_ttl}}``.
        content_security_policy: CSP directives ``{directive: [sources] | true}``.
        certificate_arn: ACM certificate (us-east-1) for the site domains.
        cloudflare_zone_id: Cloudflare zone for proxied CNAME records.
        team: Owning team, stored in resource tags.
    """

    name: str
    domain: str
    additional_domains: list[str] = field(default_factory=list)
    content_routing_rules: dict[str, str] = field(default_factory=dict)
    content_proxy: dict[str, Any] = field(default_factory=dict)
    content_security_policy: dict[str, Any] = field(default_factory=dict)
    certificate_arn: str | None = None
    cloudflare_zone_id: str | None = None
    team: str = "default"

    @classmethod
    def from_pulumi_config(cls, config: pulumi.Config) -> "SiteConfig":
        """
        Build SiteConfig from pulumi.Config(). Keys and parsers come from _CONFIG_SPEC.

        Raises:
            pulumi.ConfigMissingError: name or domain is not set.
            ValueError: A structured key has the wrong shape.
        """
        kwargs = {key: parser(config, key) for key, parser in _CONFIG_SPEC}
        return cls(**kwargs)
