"""
CloudFront origin and cache behavior builders.

Each builder returns a ``pulumi_aws`` input Args object to be listed in a
``aws.cloudfront.Distribution``. Origins and behaviors come in pairs: a
behavior routes a path pattern to ``target_origin_id``, so the origin with
that id must also be listed in the distribution's ``origins``.

Two kinds of origin are supported:

- **S3 website bucket**: ``bucket_origin`` + ``default_static_content_behavior``.
- **HTTP endpoint**: ``http_origin`` + ``http_proxy_behavior``; the endpoint
  path is used as a base path for every proxied request.

Path patterns follow CloudFront: ``/unsubscribe`` (exact), ``/api/*``
(prefix), ``*.gif`` (extension).
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping
from urllib.parse import urlsplit

import pulumi
import pulumi_aws as aws

STATIC_METHODS: list[str] = ["GET", "HEAD", "OPTIONS"]
ALL_METHODS: list[str] = ["HEAD", "OPTIONS", "GET", "POST", "DELETE", "PUT", "PATCH"]

# (min, default, max) TTLs in seconds.
STATIC_TTL: tuple[int, int, int] = (0, 600, 600)


@dataclass(frozen=True)
class ProxyTarget:
    """
    Upstream for a proxied path: a URL plus how long CloudFront caches it.

    Config accepts either a plain URL (never cached) or a mapping with an
    ``origin`` key and optional ``min_ttl``/``default_ttl``/``max_ttl``.
    """

    origin: str
    min_ttl: int = 0
    default_ttl: int = 0
    max_ttl: int = 0

    @classmethod
    def parse(cls, value: str | Mapping[str, Any]) -> "ProxyTarget":
        if isinstance(value, str):
            return cls(origin=value)
        if isinstance(value, Mapping):
            if "origin" not in value:
                raise ValueError(f"proxy target {dict(value)!r} has no 'origin'")
            return cls(
                origin=value["origin"],
                min_ttl=int(value.get("min_ttl", 0)),
                default_ttl=int(value.get("default_ttl", 0)),
                max_ttl=int(value.get("max_ttl", 0)),
            )
        raise ValueError(f"proxy target must be a URL or a mapping, got {value!r}")

    @property
    def origin_id(self) -> str:
        url = urlsplit(self.origin)
        return f"{url.hostname}{url.path}"


def _custom_origin_config(
    origin_protocol_policy: str,
) -> aws.cloudfront.DistributionOriginCustomOriginConfigArgs:
    return aws.cloudfront.DistributionOriginCustomOriginConfigArgs(
        origin_protocol_policy=origin_protocol_policy,
        http_port=80,
        https_port=443,
        origin_ssl_protocols=["TLSv1.2"],
    )


def bucket_origin(
    origin_id: pulumi.Input[str],
    website_endpoint: pulumi.Input[str],
) -> aws.cloudfront.DistributionOriginArgs:
    """
    Origin for an S3 bucket configured as a website.

    S3 website endpoints only serve plain HTTP, so the origin is http-only.
    """
    return aws.cloudfront.DistributionOriginArgs(
        origin_id=origin_id,
        domain_name=website_endpoint,
        custom_origin_config=_custom_origin_config("http-only"),
    )


def http_origin(
    target: ProxyTarget,
) -> aws.cloudfront.DistributionOriginArgs:
    """
    Origin for an HTTP(S) endpoint; its path becomes the origin base path.

    With ``https://docs.example.org/legacy`` a request for ``/docs/eth`` is
    fetched from ``https://docs.example.org/legacy/docs/eth``.
    """
    url = urlsplit(target.origin)
    policy = "https-only" if url.scheme == "https" else "http-only"
    return aws.cloudfront.DistributionOriginArgs(
        origin_id=target.origin_id,
        domain_name=url.hostname,
        origin_path=url.path.rstrip("/"),
        custom_origin_config=_custom_origin_config(policy),
    )


def default_static_content_behavior(
    origin_id: pulumi.Input[str],
    response_headers_policy_id: pulumi.Input[str] | None = None,
) -> aws.cloudfront.DistributionDefaultCacheBehaviorArgs:
    """Catch-all behavior serving the content bucket, cached for 10 minutes."""
    min_ttl, default_ttl, max_ttl = STATIC_TTL
    return aws.cloudfront.DistributionDefaultCacheBehaviorArgs(
        target_origin_id=origin_id,
        compress=True,
        viewer_protocol_policy="redirect-to-https",
        allowed_methods=STATIC_METHODS,
        cached_methods=STATIC_METHODS,
        forwarded_values=aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesArgs(
            query_string=False,
            cookies=aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesCookiesArgs(
                forward="none",
            ),
        ),
        min_ttl=min_ttl,
        default_ttl=default_ttl,
        max_ttl=max_ttl,
        response_headers_policy_id=response_headers_policy_id,
    )


def http_proxy_behavior(
    path_pattern: str,
    target: ProxyTarget,
    response_headers_policy_id: pulumi.Input[str] | None = None,
) -> aws.cloudfront.DistributionOrderedCacheBehaviorArgs:
    """
    Proxy ``path_pattern`` to an HTTP origin, forwarding headers and query.

    Pair with ``http_origin(target)`` in the distribution origins.
    """
    return aws.cloudfront.DistributionOrderedCacheBehaviorArgs(
        path_pattern=path_pattern,
        target_origin_id=target.origin_id,
        compress=True,
        viewer_protocol_policy="redirect-to-https",
        allowed_methods=ALL_METHODS,
        cached_methods=STATIC_METHODS,
        forwarded_values=aws.cloudfront.DistributionOrderedCacheBehaviorForwardedValuesArgs(
            headers=["*"],
            query_string=True,
            query_string_cache_keys=[],
            cookies=aws.cloudfront.DistributionOrderedCacheBehaviorForwardedValuesCookiesArgs(
                forward="none",
            ),
        ),
        min_ttl=target.min_ttl,
        default_ttl=target.default_ttl,
        max_ttl=target.max_ttl,
        response_headers_policy_id=response_headers_policy_id,
    )


def unique_origins(
    origins: Iterable[aws.cloudfront.DistributionOriginArgs],
) -> list[aws.cloudfront.DistributionOriginArgs]:
    """Drop origins whose ``origin_id`` was already seen; first one wins."""
    seen = set()
    result = []
    for origin in origins:
        if origin.origin_id in seen:
            continue
        seen.add(origin.origin_id)
        result.append(origin)
    return result


def behavior_targets(
    default_target: str,
    ordered: Iterable[tuple[str, str]],
) -> dict[str, str]:
    """
    Summarize routing as ``{path pattern: origin id}`` for stack outputs.

    ``"*"`` maps to the default behavior's origin.
    """
    targets = {"*": default_target}
    for path_pattern, origin_id in ordered:
        targets[path_pattern] = origin_id
    return targets
