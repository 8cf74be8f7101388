"""
DNS records pointing a service's domains at its CloudFront distribution.

Every domain gets a Route53 alias A record in the hosted zone of its TLD
domain (``play.decentraland.org`` -> zone ``decentraland.org``). Domains on
Cloudflare managed TLDs (see ``is_cloudflare_domain``) also get a proxied
CNAME in the Cloudflare zone when a zone id is configured.
"""

import pulumi
import pulumi_aws as aws
import pulumi_cloudflare as cloudflare

from recipes._helpers import (
    is_cloudflare_domain,
    record_resource_name,
    split_service_domain,
)

ID: str = "dcl:recipes:DomainRecords"


class DomainRecords(pulumi.ComponentResource):
    """
    Route53 alias records and optional Cloudflare CNAMEs for a distribution.
    """

    def __init__(
        self,
        name: str,
        domains: list[str],
        distribution_domain_name: pulumi.Input[str],
        distribution_hosted_zone_id: pulumi.Input[str],
        cloudflare_zone_id: str | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Args:
            name: Service name (component name).
            domains: Fully qualified hosts to route.
            distribution_domain_name: CloudFront host, alias/CNAME target.
            distribution_hosted_zone_id: CloudFront Route53 zone id.
            cloudflare_zone_id: Cloudflare zone for CNAME records; skipped
                when not set.
            opts: Pulumi resource options for the component.

        Outputs (set on self, registered for the component):
            record_names: Route53 record FQDNs.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        records = []
        for domain in domains:
            subdomain, tld_domain = split_service_domain(domain)
            zone = aws.route53.get_zone_output(name=tld_domain)
            records.append(
                aws.route53.Record(
                    resource_name=record_resource_name(name, domain, "a"),
                    zone_id=zone.zone_id,
                    name=domain,
                    type="A",
                    aliases=[
                        aws.route53.RecordAliasArgs(
                            name=distribution_domain_name,
                            zone_id=distribution_hosted_zone_id,
                            evaluate_target_health=False,
                        )
                    ],
                    opts=child_opts,
                )
            )

            if cloudflare_zone_id and is_cloudflare_domain(domain):
                # ttl=1 means "automatic", required for proxied records.
                cloudflare.DnsRecord(
                    resource_name=record_resource_name(name, domain, "cname"),
                    zone_id=cloudflare_zone_id,
                    name=subdomain or tld_domain,
                    type="CNAME",
                    content=distribution_domain_name,
                    proxied=True,
                    ttl=1,
                    opts=child_opts,
                )

        self.record_names: pulumi.Output[list[str]] = pulumi.Output.all(
            *[record.fqdn for record in records]
        )
        self.register_outputs({"record_names": self.record_names})
