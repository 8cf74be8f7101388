"""
CloudFront response headers policy with the security headers every site sends.

Attached to the content and proxy behaviors of a distribution through
``response_headers_policy_id``.
"""

import pulumi
import pulumi_aws as aws

ID: str = "dcl:recipes:SecurityHeadersPolicy"

HSTS_MAX_AGE: int = 63072000  # two years


class SecurityHeadersPolicy(pulumi.ComponentResource):
    """
    Response headers policy: HSTS, nosniff, SAMEORIGIN frames, referrer
    policy, XSS protection and an optional Content-Security-Policy.
    """

    def __init__(
        self,
        name: str,
        content_security_policy: str | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Args:
            name: Service name; the policy is named ``<name>-security-headers``.
            content_security_policy: Header value (see
                _helpers.content_security_policy). Omitted when empty.
            opts: Pulumi resource options for the component.

        Outputs (set on self, registered for the component):
            policy_id: Id to use as ``response_headers_policy_id``.
        """
        super().__init__(ID, name, None, opts)

        csp = None
        if content_security_policy:
            csp = aws.cloudfront.ResponseHeadersPolicySecurityHeadersConfigContentSecurityPolicyArgs(
                content_security_policy=content_security_policy,
                override=True,
            )

        security_headers = aws.cloudfront.ResponseHeadersPolicySecurityHeadersConfigArgs(
            content_security_policy=csp,
            content_type_options=aws.cloudfront.ResponseHeadersPolicySecurityHeadersConfigContentTypeOptionsArgs(
                override=True,
            ),
            frame_options=aws.cloudfront.ResponseHeadersPolicySecurityHeadersConfigFrameOptionsArgs(
                frame_option="SAMEORIGIN",
                override=True,
            ),
            referrer_policy=aws.cloudfront.ResponseHeadersPolicySecurityHeadersConfigReferrerPolicyArgs(
                referrer_policy="strict-origin-when-cross-origin",
                override=True,
            ),
            strict_transport_security=aws.cloudfront.ResponseHeadersPolicySecurityHeadersConfigStrictTransportSecurityArgs(
                access_control_max_age_sec=HSTS_MAX_AGE,
                include_subdomains=True,
                preload=True,
                override=True,
            ),
            xss_protection=aws.cloudfront.ResponseHeadersPolicySecurityHeadersConfigXssProtectionArgs(
                mode_block=True,
                protection=True,
                override=True,
            ),
        )

        self.policy = aws.cloudfront.ResponseHeadersPolicy(
            resource_name=f"{name}-security-headers",
            name=f"{name}-security-headers",
            comment=f"Security headers for {name}",
            security_headers_config=security_headers,
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.policy_id: pulumi.Output[str] = self.policy.id
        self.register_outputs({"policy_id": self.policy_id})
