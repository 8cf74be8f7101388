"""
CloudFront distribution in front of a service, with request logs in S3.

Origins and cache behaviors are built by the caller (see
``recipes.cloudfront``); this component only owns the distribution and its
log bucket. Outputs (``domain_name``, ``hosted_zone_id``, ``url``) are
``Output[str]`` so DNS records can alias the distribution.
"""

import logging
from typing import Mapping, Sequence

import pulumi
import pulumi_aws as aws

logger: logging.Logger = logging.getLogger(__name__)

ID: str = "dcl:recipes:CloudfrontDistribution"


class CloudfrontDistribution(pulumi.ComponentResource):
    """
    Distribution (http2, PriceClass_100) plus an ACL enabled log bucket.

    Resources: Bucket, BucketOwnershipControls, BucketAcl, Distribution.
    """

    def __init__(
        self,
        name: str,
        domains: Sequence[str],
        origins: pulumi.Input[Sequence[pulumi.Input[aws.cloudfront.DistributionOriginArgs]]],
        default_cache_behavior: pulumi.Input[aws.cloudfront.DistributionDefaultCacheBehaviorArgs],
        ordered_cache_behaviors: pulumi.Input[
            Sequence[pulumi.Input[aws.cloudfront.DistributionOrderedCacheBehaviorArgs]]
        ] = (),
        certificate_arn: pulumi.Input[str] | None = None,
        tags: Mapping[str, str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the log bucket and the distribution.

        Args:
            name: Service name; resources are named ``<name>-logs``/``<name>-cdn``.
            domains: Hosts served by the distribution. The first one is the
                log prefix. Used as aliases only with a certificate.
            origins: Distribution origins; every behavior target must be here.
            default_cache_behavior: Catch-all behavior.
            ordered_cache_behaviors: Path specific behaviors, first match wins.
            certificate_arn: ACM certificate (us-east-1) covering ``domains``.
                Without it the default ``*.cloudfront.net`` certificate is
                used and no aliases are set.
            tags: Tags for the log bucket and the distribution.
            opts: Pulumi resource options for the component.

        Outputs (set on self, registered for the component):
            domain_name: Distribution host (``xxxx.cloudfront.net``).
            hosted_zone_id: Route53 zone id for alias records.
            url: HTTPS URL of the distribution.
        """
        super().__init__(ID, name, None, opts)

        logger.debug("provisioning distribution %s for %s", name, list(domains))
        child_opts = pulumi.ResourceOptions(parent=self)

        # CloudFront standard logging writes through ACLs.
        self.logs_bucket = aws.s3.Bucket(
            resource_name=f"{name}-logs",
            tags=tags,
            opts=child_opts,
        )
        ownership = aws.s3.BucketOwnershipControls(
            resource_name=f"{name}-logs-ownership",
            bucket=self.logs_bucket.id,
            rule=aws.s3.BucketOwnershipControlsRuleArgs(
                object_ownership="BucketOwnerPreferred",
            ),
            opts=child_opts,
        )
        logs_acl = aws.s3.BucketAcl(
            resource_name=f"{name}-logs-acl",
            bucket=self.logs_bucket.id,
            acl="log-delivery-write",
            opts=pulumi.ResourceOptions(parent=self, depends_on=[ownership]),
        )

        if certificate_arn:
            aliases = list(domains)
            viewer_certificate = aws.cloudfront.DistributionViewerCertificateArgs(
                acm_certificate_arn=certificate_arn,
                ssl_support_method="sni-only",
                minimum_protocol_version="TLSv1.2_2021",
            )
        else:
            aliases = None
            viewer_certificate = aws.cloudfront.DistributionViewerCertificateArgs(
                cloudfront_default_certificate=True,
            )

        self.distribution = aws.cloudfront.Distribution(
            resource_name=f"{name}-cdn",
            enabled=True,
            tags=tags,
            http_version="http2",
            aliases=aliases,
            default_root_object="index.html",
            origins=origins,
            default_cache_behavior=default_cache_behavior,
            ordered_cache_behaviors=ordered_cache_behaviors,
            price_class="PriceClass_100",
            custom_error_responses=[],
            restrictions=aws.cloudfront.DistributionRestrictionsArgs(
                geo_restriction=aws.cloudfront.DistributionRestrictionsGeoRestrictionArgs(
                    restriction_type="none",
                ),
            ),
            viewer_certificate=viewer_certificate,
            logging_config=aws.cloudfront.DistributionLoggingConfigArgs(
                bucket=self.logs_bucket.bucket_domain_name,
                include_cookies=False,
                prefix=f"{domains[0]}/",
            ),
            opts=pulumi.ResourceOptions(parent=self, depends_on=[logs_acl]),
        )

        self.domain_name: pulumi.Output[str] = self.distribution.domain_name
        self.hosted_zone_id: pulumi.Output[str] = self.distribution.hosted_zone_id
        self.url: pulumi.Output[str] = pulumi.Output.concat(
            "https://", self.distribution.domain_name
        )
        self.register_outputs(
            {
                "domain_name": self.domain_name,
                "hosted_zone_id": self.hosted_zone_id,
                "url": self.url,
            }
        )
