"""
Redirect map to S3 website routing rules. Testable without Pulumi runtime.

A redirect map is a plain ``{source: target}`` mapping written by hand in the
stack config, e.g.::

    {
        "/agora/*": "/dao/",
        "/docs/*": "/documentation/$1",
        "/avatars/*": "https://builder.decentraland.org/names/",
        "/builder/*": "https://builder.decentraland.org/$1",
    }

Sources must be path-prefix wildcards (``/<prefix>/*``); a bare ``/*`` is
rejected. Absolute targets need a host. A target ending in
``/$1`` keeps the part of the path matched by ``*`` (prefix replacement);
any other target replaces the whole key. Rows that do not follow these
shapes are dropped, never raised.
"""

import json
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlsplit

ABSOLUTE_SCHEMES: tuple[str, ...] = ("http://", "https://")
PREFIX_PLACEHOLDER: str = "/$1"


@dataclass(frozen=True)
class RoutingRule:
    """
    One S3 website routing rule: a key prefix condition plus its redirect.

    Exactly one of ``replace_key_with`` and ``replace_key_prefix_with`` is
    set. ``protocol`` and ``host_name`` are optional.
    """

    key_prefix_equals: str
    replace_key_with: str | None = None
    replace_key_prefix_with: str | None = None
    protocol: str | None = None
    host_name: str | None = None

    def to_s3(self) -> dict:
        """Return the rule in the shape the S3 website API expects."""
        redirect = {
            "Protocol": self.protocol,
            "HostName": self.host_name,
            "ReplaceKeyWith": self.replace_key_with,
            "ReplaceKeyPrefixWith": self.replace_key_prefix_with,
        }
        return {
            "Condition": {"KeyPrefixEquals": self.key_prefix_equals},
            "Redirect": {k: v for k, v in redirect.items() if v is not None},
        }


def is_valid_source(source: str) -> bool:
    return (
        isinstance(source, str)
        and source != "/*"
        and source.startswith("/")
        and source.endswith("/*")
    )


def is_valid_target(target: str) -> bool:
    if not isinstance(target, str):
        return False
    if target.startswith(ABSOLUTE_SCHEMES):
        # S3 rejects a Protocol without a HostName.
        return bool(urlsplit(target).hostname)
    return target.startswith("/")


def create_routing_rules(
    redirects: Mapping[str, str] | None = None,
    hostname: str | None = None,
    protocol: str | None = None,
) -> list[RoutingRule]:
    """
    Compile a redirect map into S3 routing rules, keeping input order.

    Args:
        redirects: ``{"/<prefix>/*": target}``; target is a path (``/new/``),
            a path keeping the wildcard match (``/new/$1``) or an absolute
            URL with either form. Invalid rows are skipped.
        hostname: Host name attached to rules with a relative target.
        protocol: Protocol ("http" or "https") attached to rules with a
            relative target.

    Returns:
        One RoutingRule per valid row. Absolute targets always carry the
        protocol and host of their own URL.
    """
    rules = []
    for source, target in (redirects or {}).items():
        if not is_valid_source(source) or not is_valid_target(target):
            continue

        options = {}
        if target.startswith(ABSOLUTE_SCHEMES):
            url = urlsplit(target)
            options["protocol"] = "https" if url.scheme == "https" else "http"
            options["host_name"] = url.hostname
            path = url.path or "/"
        else:
            if hostname:
                options["host_name"] = hostname
            if protocol:
                options["protocol"] = protocol
            path = target

        # "/new/$1" -> "new/": only the matched prefix is swapped.
        if path.endswith(PREFIX_PLACEHOLDER):
            options["replace_key_prefix_with"] = path[1:-2]
        else:
            options["replace_key_with"] = path[1:]

        rules.append(RoutingRule(key_prefix_equals=source[1:-1], **options))

    return rules


def dropped_redirects(
    redirects: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the sources of the rows create_routing_rules skips."""
    return [
        source
        for source, target in (redirects or {}).items()
        if not is_valid_source(source) or not is_valid_target(target)
    ]


def routing_rule_details(
    rules: list[RoutingRule],
) -> str | None:
    """
    Serialize rules for ``BucketWebsiteConfiguration.routing_rule_details``.

    Returns None for an empty list so no routing rules are attached.
    """
    if not rules:
        return None
    return json.dumps([rule.to_s3() for rule in rules])
