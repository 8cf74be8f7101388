"""
Static site recipes.

Each building block is a ComponentResource for clear ownership, testability,
and reuse. Use from the Pulumi entrypoint (e.g. __main__.py) with config and
output chaining:

- **StaticSite**: the full recipe; wires the components below from a
  service name, domain, redirect map and proxy map.
- **ContentBucket**: S3 website bucket with routing rules compiled from the
  redirect map; exposes website_endpoint as CloudFront origin.
- **SecurityHeadersPolicy**: CloudFront response headers policy; exposes
  policy_id for cache behaviors.
- **CloudfrontDistribution**: distribution plus log bucket; exposes
  domain_name and hosted_zone_id for DNS.
- **DomainRecords**: Route53 aliases and Cloudflare CNAMEs for a distribution.
"""

from recipes.content_bucket import ContentBucket
from recipes.distribution import CloudfrontDistribution
from recipes.dns import DomainRecords
from recipes.headers import SecurityHeadersPolicy
from recipes.site import StaticSite

__all__ = [
    "CloudfrontDistribution",
    "ContentBucket",
    "DomainRecords",
    "SecurityHeadersPolicy",
    "StaticSite",
]
