"""
Pure helpers for service naming, domains and headers. Testable without Pulumi runtime.

Used by the recipe components (service names, domains, DNS split) and by the
entrypoint (stack id, version). No Pulumi types; all functions accept and
return plain Python types so they can be unit-tested without a Pulumi stack.
"""

import re
from typing import Iterable, Mapping, TypeVar

T = TypeVar("T")

# TLDs whose zones are proxied through Cloudflare on top of Route53.
CLOUDFLARE_TLDS: tuple[str, ...] = (".org", ".today", ".zone", ".systems", ".services")


def slug(
    value: str,
) -> str:
    """
    Replace every non-word character with "-" and trim leading/trailing "-".

    Example: "My Site!" -> "My-Site".
    """
    return re.sub(r"\W", "-", value).strip("-")


def record_resource_name(
    name: str,
    domain: str,
    kind: str,
) -> str:
    """Pulumi name of a DNS record, scoped to its component: "<name>-<domain>-<kind>"."""
    return f"{name}-{slug(domain)}-{kind}"


def truthy(
    values: Iterable[T | None],
) -> list[T]:
    """Drop None, False and empty values, keeping order."""
    return [value for value in values if value]


def service_name(
    name: str,
) -> str:
    return slug(name)


def stack_id(
    environ: Mapping[str, str],
) -> str:
    """Return STACK_ID from the environment, or "default"."""
    return environ.get("STACK_ID") or "default"


def scoped_service_name(
    name: str,
    stack: str | None = None,
) -> str:
    """
    Service name scoped to a stack, e.g. "site-pr-12" for stack "pr-12".

    Without a stack id the plain service name is returned, so the default
    stack keeps unscoped resource names.
    """
    if stack:
        return f"{slug(name)}-{slug(stack)}"
    return slug(name)


def service_version(
    environ: Mapping[str, str],
) -> str:
    """
    Version label for the current build from CI variables.

    First match wins: CI_COMMIT_TAG, CI_COMMIT_SHA (first 6 chars),
    CI_COMMIT_BRANCH, then "current".
    """
    sha = environ.get("CI_COMMIT_SHA")
    return (
        environ.get("CI_COMMIT_TAG")
        or (sha and sha[:6])
        or environ.get("CI_COMMIT_BRANCH")
        or "current"
    )


def service_subdomain(
    name: str,
    domain: str,
) -> str:
    """Build the service host, e.g. "landing.decentraland.org"."""
    return f"{service_name(name)}.{domain}"


def service_domains(
    name: str,
    domain: str,
    additional_domains: Iterable[str | None] = (),
) -> list[str]:
    """
    All hosts a service answers on: its subdomain, then additional domains.

    Falsy entries are skipped and duplicates removed, first occurrence wins.
    """
    domains = [service_subdomain(name, domain), *truthy(additional_domains)]
    return list(dict.fromkeys(domains))


def split_service_domain(
    domain: str,
) -> tuple[str, str]:
    """
    Split a host into (subdomain, tld domain).

    Example: "play.decentraland.org" -> ("play", "decentraland.org").
    Apex domains return an empty subdomain.
    """
    labels = domain.rstrip(".").split(".")
    return ".".join(labels[:-2]), ".".join(labels[-2:])


def is_cloudflare_domain(
    domain: str,
) -> bool:
    return domain.endswith(CLOUDFLARE_TLDS)


def content_security_policy(
    directives: Mapping[str, Iterable[str] | bool],
) -> str:
    """
    Build a Content-Security-Policy header value from a directive map.

    Args:
        directives: ``{"default-src": ["'self'"], "upgrade-insecure-requests": True}``.
            Source lists are joined with spaces (a single string is used
            as-is); ``True`` emits a bare flag
            directive; ``False`` and empty lists are skipped.

    Returns:
        Directives joined with "; " in insertion order, e.g.
        "default-src 'self'; upgrade-insecure-requests".
    """
    parts = []
    for directive, sources in directives.items():
        if sources is True:
            parts.append(directive)
        elif not sources:
            continue
        elif isinstance(sources, str):
            parts.append(f"{directive} {sources}")
        else:
            parts.append(" ".join([directive, *sources]))
    return "; ".join(parts)
