"""
Static site recipe - Pulumi entrypoint.

Reads the stack config and builds one StaticSite:

- **Content**: S3 website bucket with the redirect map compiled into routing
  rules (relative redirects keep the service domain as host).
- **CDN**: CloudFront distribution serving the bucket by default and the
  configured proxy paths, with security headers on every response.
- **DNS**: Route53 alias (and Cloudflare CNAME) records for every service
  domain, when a certificate is configured.

Stack exports: bucket_name, cloudfront_url, cloudfront_domain, behaviors,
domains, service_version.
"""

import logging
import os

import pulumi

from config import SiteConfig
from recipes import StaticSite
from recipes._helpers import (
    content_security_policy,
    service_name,
    service_version,
    stack_id,
)


def main():
    """
    Build the StaticSite from config and export stack outputs.

    Resources are scoped by the STACK_ID environment variable and tagged
    with service name, stack id and team.
    """
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    config = SiteConfig.from_pulumi_config(pulumi.Config())
    version = service_version(os.environ)

    pulumi.log.info(
        f"running static site recipe for {config.name}.{config.domain} ({version})"
    )

    tags = {
        "ServiceName": service_name(config.name),
        "StackId": stack_id(os.environ),
        "Team": config.team,
    }
    site = StaticSite(
        config.name,
        domain=config.domain,
        additional_domains=config.additional_domains,
        content_routing_rules=config.content_routing_rules,
        content_proxy=config.content_proxy,
        content_security_policy=content_security_policy(config.content_security_policy),
        certificate_arn=config.certificate_arn,
        cloudflare_zone_id=config.cloudflare_zone_id,
        stack=os.environ.get("STACK_ID"),
        tags=tags,
    )

    for output_name, value in [
        ("bucket_name", site.bucket_name),
        ("cloudfront_url", site.cloudfront_url),
        ("cloudfront_domain", site.cloudfront_domain_name),
        ("behaviors", site.behaviors),
        ("domains", site.domains),
        ("service_version", version),
    ]:
        pulumi.export(output_name, value)


if __name__ == "__main__":
    main()
