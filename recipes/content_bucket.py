"""
S3 content bucket served as a static website.

The bucket holds the site's generated files and is configured as an S3
website (``index.html``/``404.html``) so requests for ``foo/`` resolve to
``foo/index.html``. Redirects from the stack config are compiled into S3
routing rules and attached to the website configuration. Objects are
publicly readable through a bucket policy because CloudFront reaches the
bucket through its website endpoint, not through OAC.
"""

import json
import logging
from typing import Mapping

import pulumi
import pulumi_aws as aws

from recipes._routing import RoutingRule, routing_rule_details

logger: logging.Logger = logging.getLogger(__name__)

ID: str = "dcl:recipes:ContentBucket"

# Website buckets are read through a public-read policy, so only ACL based
# public access stays blocked.
S3_WEBSITE_PUBLIC_ACCESS: dict[str, bool] = {
    "block_public_acls": True,
    "block_public_policy": False,
    "ignore_public_acls": True,
    "restrict_public_buckets": False,
}


def public_read_policy(bucket: str) -> str:
    """Bucket policy document granting anonymous s3:GetObject on every key."""
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": "*",
                    "Action": ["s3:GetObject"],
                    "Resource": [f"arn:aws:s3:::{bucket}/*"],
                }
            ],
        }
    )


class ContentBucket(pulumi.ComponentResource):
    """
    Website bucket with routing rules, CORS and a public-read policy.

    Resources: Bucket, BucketPublicAccessBlock, BucketWebsiteConfiguration,
    BucketCorsConfiguration, BucketPolicy.
    """

    def __init__(
        self,
        name: str,
        domain: str,
        routing_rules: list[RoutingRule] | None = None,
        tags: Mapping[str, str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the bucket and its website configuration.

        Args:
            name: Service name; resources are named ``<name>-website*``.
            domain: Service domain, stored in the bucket's Name tag.
            routing_rules: Compiled redirects (see create_routing_rules).
            tags: Extra bucket tags.
            opts: Pulumi resource options for the component.

        Outputs (set on self, registered for the component):
            bucket_name: Generated bucket name (upload target).
            arn: Bucket ARN.
            website_endpoint: S3 website host, used as CloudFront origin.
        """
        super().__init__(ID, name, None, opts)

        logger.debug("provisioning content bucket %s for %s", name, domain)
        child_opts = pulumi.ResourceOptions(parent=self)

        self.bucket = aws.s3.Bucket(
            resource_name=f"{name}-website",
            tags={**(tags or {}), "Name": domain},
            opts=child_opts,
        )

        public_access = aws.s3.BucketPublicAccessBlock(
            resource_name=f"{name}-website-public-access",
            bucket=self.bucket.id,
            opts=child_opts,
            **S3_WEBSITE_PUBLIC_ACCESS,
        )

        self.website = aws.s3.BucketWebsiteConfiguration(
            resource_name=f"{name}-website-config",
            bucket=self.bucket.id,
            index_document=aws.s3.BucketWebsiteConfigurationIndexDocumentArgs(
                suffix="index.html",
            ),
            error_document=aws.s3.BucketWebsiteConfigurationErrorDocumentArgs(
                key="404.html",
            ),
            routing_rule_details=routing_rule_details(routing_rules or []),
            opts=child_opts,
        )

        aws.s3.BucketCorsConfiguration(
            resource_name=f"{name}-website-cors",
            bucket=self.bucket.id,
            cors_rules=[
                aws.s3.BucketCorsConfigurationCorsRuleArgs(
                    allowed_methods=["GET", "HEAD"],
                    allowed_origins=["*"],
                    expose_headers=["ETag"],
                    max_age_seconds=3600,
                )
            ],
            opts=child_opts,
        )

        # The policy is rejected while BlockPublicPolicy is still on.
        aws.s3.BucketPolicy(
            resource_name=f"{name}-website-bucket-policy",
            bucket=self.bucket.id,
            policy=self.bucket.bucket.apply(public_read_policy),
            opts=pulumi.ResourceOptions(parent=self, depends_on=[public_access]),
        )

        self.bucket_name: pulumi.Output[str] = self.bucket.bucket
        self.arn: pulumi.Output[str] = self.bucket.arn
        self.website_endpoint: pulumi.Output[str] = self.website.website_endpoint
        self.register_outputs(
            {
                "bucket_name": self.bucket_name,
                "arn": self.arn,
                "website_endpoint": self.website_endpoint,
            }
        )
