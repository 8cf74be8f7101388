"""Tests for pure helpers"""

from recipes import _helpers


class TestSlug:
    def test_replaces_non_word_characters(self):
        assert _helpers.slug("my site.v2") == "my-site-v2"

    def test_trims_dashes(self):
        assert _helpers.slug("--landing!") == "landing"


class TestRecordResourceName:
    def test_scoped_by_component(self):
        assert _helpers.record_resource_name("landing-pr-1", "play.decentraland.org", "a") == (
            "landing-pr-1-play-decentraland-org-a"
        )

    def test_distinct_per_component(self):
        names = {
            _helpers.record_resource_name(service, "play.decentraland.org", "cname")
            for service in ("landing-pr-1", "landing-pr-2")
        }
        assert len(names) == 2


class TestTruthy:
    def test_drops_falsy_values(self):
        assert _helpers.truthy(["a.org", None, "", False, "b.org"]) == ["a.org", "b.org"]


class TestServiceNames:
    def test_scoped_with_stack(self):
        assert _helpers.scoped_service_name("landing", "pr 12") == "landing-pr-12"

    def test_unscoped_without_stack(self):
        assert _helpers.scoped_service_name("landing") == "landing"

    def test_stack_id_default(self):
        assert _helpers.stack_id({}) == "default"
        assert _helpers.stack_id({"STACK_ID": "pr-1"}) == "pr-1"


class TestServiceVersion:
    def test_prefers_tag(self):
        env = {"CI_COMMIT_TAG": "1.2.0", "CI_COMMIT_SHA": "abcdef123"}
        assert _helpers.service_version(env) == "1.2.0"

    def test_short_sha(self):
        env = {"CI_COMMIT_SHA": "abcdef123", "CI_COMMIT_BRANCH": "main"}
        assert _helpers.service_version(env) == "abcdef"

    def test_branch(self):
        assert _helpers.service_version({"CI_COMMIT_BRANCH": "main"}) == "main"

    def test_current(self):
        assert _helpers.service_version({}) == "current"


class TestServiceDomains:
    def test_subdomain(self):
        assert _helpers.service_subdomain("landing", "decentraland.org") == "landing.decentraland.org"

    def test_additional_domains_deduplicated(self):
        domains = _helpers.service_domains(
            "landing",
            "decentraland.org",
            ["decentraland.org", None, "landing.decentraland.org"],
        )
        assert domains == ["landing.decentraland.org", "decentraland.org"]


class TestSplitServiceDomain:
    def test_subdomain(self):
        assert _helpers.split_service_domain("play.decentraland.org") == ("play", "decentraland.org")

    def test_nested_subdomain(self):
        assert _helpers.split_service_domain("a.b.example.com") == ("a.b", "example.com")

    def test_apex(self):
        assert _helpers.split_service_domain("decentraland.org") == ("", "decentraland.org")


class TestIsCloudflareDomain:
    def test_cloudflare_tld(self):
        assert _helpers.is_cloudflare_domain("play.decentraland.zone")

    def test_other_tld(self):
        assert not _helpers.is_cloudflare_domain("play.decentraland.io")


class TestContentSecurityPolicy:
    def test_joins_directives_in_order(self):
        csp = _helpers.content_security_policy(
            {
                "default-src": ["'self'"],
                "img-src": ["'self'", "data:", "https:"],
                "upgrade-insecure-requests": True,
            }
        )
        assert csp == "default-src 'self'; img-src 'self' data: https:; upgrade-insecure-requests"

    def test_skips_empty_directives(self):
        csp = _helpers.content_security_policy(
            {"default-src": "'self'", "script-src": [], "block-all-mixed-content": False}
        )
        assert csp == "default-src 'self'"

    def test_empty(self):
        assert _helpers.content_security_policy({}) == ""
