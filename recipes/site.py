"""
Static site recipe: content bucket + proxies behind CloudFront, routed by DNS.

The site's files live in a ``ContentBucket`` served as the distribution's
default behavior. Redirects are compiled into the bucket's routing rules,
with the service domain as host name so relative redirects stay on the
public domain instead of the S3 website host. Proxied paths (e.g.
``/blog/*``) are forwarded to other HTTP origins. All content and proxy
behaviors send the ``SecurityHeadersPolicy`` headers. Finally every service
domain is routed to the distribution.
"""

import logging
from typing import Any, Mapping, Sequence

import pulumi

from recipes import cloudfront
from recipes._helpers import (
    scoped_service_name,
    service_domains,
    service_subdomain,
)
from recipes._routing import create_routing_rules, dropped_redirects
from recipes.content_bucket import ContentBucket
from recipes.distribution import CloudfrontDistribution
from recipes.dns import DomainRecords
from recipes.headers import SecurityHeadersPolicy

logger: logging.Logger = logging.getLogger(__name__)

ID: str = "dcl:recipes:StaticSite"

CONTENT_ORIGIN_ID: str = "s3-content"


class StaticSite(pulumi.ComponentResource):
    """
    A static website on ``<name>.<domain>``.

    Children: SecurityHeadersPolicy, ContentBucket, CloudfrontDistribution,
    DomainRecords.
    """

    def __init__(
        self,
        name: str,
        domain: str,
        additional_domains: Sequence[str] = (),
        content_routing_rules: Mapping[str, str] | None = None,
        content_proxy: Mapping[str, str | Mapping[str, Any]] | None = None,
        content_security_policy: str | None = None,
        certificate_arn: str | None = None,
        cloudflare_zone_id: str | None = None,
        stack: str | None = None,
        tags: Mapping[str, str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Build the whole site.

        Args:
            name: Service name; slugged and used as subdomain of ``domain``.
            domain: TLD domain the service lives under (e.g. "decentraland.org").
            additional_domains: Extra hosts served by the distribution.
            content_routing_rules: Redirect map, e.g.
                ``{"/docs/*": "/documentation/$1"}``. Invalid rows are skipped
                with a warning.
            content_proxy: ``{path pattern: target}``; target is a URL or a
                mapping with ``origin`` and optional TTLs (see ProxyTarget).
            content_security_policy: Content-Security-Policy header value.
            certificate_arn: ACM certificate for the site domains.
            cloudflare_zone_id: Cloudflare zone for proxied CNAME records.
            stack: Stack id; child resources are named
                ``<name>-<stack>`` so several stacks share an account.
            tags: Tags for the buckets and the distribution.
            opts: Pulumi resource options for the component.

        Outputs (set on self, registered for the component):
            bucket_name: Content bucket to upload the site to.
            cloudfront_domain_name: Distribution host.
            cloudfront_url: HTTPS URL of the distribution.
            behaviors: ``{path pattern: origin id}`` routing summary.
            domains: Hosts routed to the distribution.

        Raises:
            ValueError: A content_proxy target is neither a URL nor a
                mapping with ``origin``.
        """
        super().__init__(ID, name, None, opts)

        service = scoped_service_name(name, stack)
        site_domain = service_subdomain(name, domain)
        self.domains: list[str] = service_domains(name, domain, additional_domains)
        proxies = {
            path_pattern: cloudfront.ProxyTarget.parse(target)
            for path_pattern, target in (content_proxy or {}).items()
        }
        child_opts = pulumi.ResourceOptions(parent=self)

        headers = SecurityHeadersPolicy(
            service,
            content_security_policy=content_security_policy,
            opts=child_opts,
        )

        for source in dropped_redirects(content_routing_rules):
            logger.warning(
                "ignoring redirect %r -> %r: expected '/<prefix>/*' -> '/path' or URL",
                source,
                content_routing_rules[source],
            )
        routing_rules = create_routing_rules(
            content_routing_rules,
            hostname=site_domain,
        )
        bucket = ContentBucket(
            service,
            domain=site_domain,
            routing_rules=routing_rules,
            tags=tags,
            opts=child_opts,
        )

        origins = cloudfront.unique_origins(
            [
                *[cloudfront.http_origin(target) for target in proxies.values()],
                cloudfront.bucket_origin(CONTENT_ORIGIN_ID, bucket.website_endpoint),
            ]
        )
        ordered_cache_behaviors = [
            cloudfront.http_proxy_behavior(
                path_pattern,
                target,
                response_headers_policy_id=headers.policy_id,
            )
            for path_pattern, target in proxies.items()
        ]
        cdn = CloudfrontDistribution(
            service,
            domains=self.domains,
            origins=origins,
            default_cache_behavior=cloudfront.default_static_content_behavior(
                CONTENT_ORIGIN_ID,
                response_headers_policy_id=headers.policy_id,
            ),
            ordered_cache_behaviors=ordered_cache_behaviors,
            certificate_arn=certificate_arn,
            tags=tags,
            opts=child_opts,
        )

        # Aliases only exist with a certificate; without one the site is
        # reachable on the cloudfront.net host only.
        if certificate_arn:
            DomainRecords(
                service,
                domains=self.domains,
                distribution_domain_name=cdn.domain_name,
                distribution_hosted_zone_id=cdn.hosted_zone_id,
                cloudflare_zone_id=cloudflare_zone_id,
                opts=child_opts,
            )

        self.bucket_name: pulumi.Output[str] = bucket.bucket_name
        self.cloudfront_domain_name: pulumi.Output[str] = cdn.domain_name
        self.cloudfront_url: pulumi.Output[str] = cdn.url
        self.behaviors: dict[str, str] = cloudfront.behavior_targets(
            CONTENT_ORIGIN_ID,
            [(path_pattern, target.origin_id) for path_pattern, target in proxies.items()],
        )
        self.register_outputs(
            {
                "bucket_name": self.bucket_name,
                "cloudfront_domain_name": self.cloudfront_domain_name,
                "cloudfront_url": self.cloudfront_url,
                "behaviors": self.behaviors,
                "domains": self.domains,
            }
        )
