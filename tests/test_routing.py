"""Tests for the redirect map compiler"""

import json

import pytest

from recipes import _routing
from recipes._routing import RoutingRule, create_routing_rules

HOST = {"hostname": "example.com"}
HOST_PROTOCOL = {"hostname": "example.com", "protocol": "https"}

REDIRECTS = {
    "/agora/*": "/dao/",
    "/docs/*": "/documentation/$1",
    "/avatars/*": "https://builder.decentraland.org/names/",
    "/builder/*": "https://builder.decentraland.org/$1",
}

INVALID_REDIRECTS = {
    "invalid": "/path/",
    "invalid/*": "/path/",
    "invalid/": "/path/",
    "/path1/*": "invalid/",
    "/path2/*": "invalid/*",
    "/pat3/*": "invalid/$1",
}


def s3(rules):
    return [rule.to_s3() for rule in rules]


class TestEmptyMap:
    @pytest.mark.parametrize("options", [{}, HOST, HOST_PROTOCOL])
    def test_empty_map(self, options):
        assert create_routing_rules({}, **options) == []

    def test_no_map(self):
        assert create_routing_rules() == []
        assert create_routing_rules(None) == []


class TestInvalidRows:
    @pytest.mark.parametrize("options", [{}, HOST, HOST_PROTOCOL])
    def test_drops_invalid_sources_and_targets(self, options):
        assert create_routing_rules(INVALID_REDIRECTS, **options) == []

    def test_bare_wildcard_source_is_dropped(self):
        assert create_routing_rules({"/*": "/home/"}) == []
        assert _routing.dropped_redirects({"/*": "/home/", "/a/*": "/b/"}) == ["/*"]

    @pytest.mark.parametrize("target", ["https://", "http:///docs/", "https:///$1"])
    def test_absolute_target_without_host_is_dropped(self, target):
        assert create_routing_rules({"/docs/*": target}, **HOST) == []
        assert _routing.dropped_redirects({"/docs/*": target}) == ["/docs/*"]

    def test_non_string_values_are_dropped(self):
        assert create_routing_rules({"/a/*": 42, "/b/*": None}) == []

    def test_keeps_valid_rows_among_invalid_ones(self):
        redirects = {**INVALID_REDIRECTS, "/agora/*": "/dao/"}
        assert s3(create_routing_rules(redirects)) == [
            {"Condition": {"KeyPrefixEquals": "agora/"}, "Redirect": {"ReplaceKeyWith": "dao/"}}
        ]

    def test_dropped_redirects_lists_invalid_sources(self):
        redirects = {**INVALID_REDIRECTS, "/agora/*": "/dao/"}
        assert _routing.dropped_redirects(redirects) == list(INVALID_REDIRECTS)


class TestReplaceKeyWith:
    def test_relative_target(self):
        assert create_routing_rules({"/agora/*": "/dao/"}) == [
            RoutingRule(key_prefix_equals="agora/", replace_key_with="dao/")
        ]

    def test_relative_target_with_hostname(self):
        assert s3(create_routing_rules({"/agora/*": "/dao/"}, **HOST)) == [
            {
                "Condition": {"KeyPrefixEquals": "agora/"},
                "Redirect": {"HostName": "example.com", "ReplaceKeyWith": "dao/"},
            }
        ]

    def test_relative_target_with_hostname_and_protocol(self):
        assert s3(create_routing_rules({"/agora/*": "/dao/"}, **HOST_PROTOCOL)) == [
            {
                "Condition": {"KeyPrefixEquals": "agora/"},
                "Redirect": {
                    "HostName": "example.com",
                    "Protocol": "https",
                    "ReplaceKeyWith": "dao/",
                },
            }
        ]

    def test_absolute_target(self):
        redirects = {"/avatars/*": "https://builder.decentraland.org/names/"}
        assert s3(create_routing_rules(redirects)) == [
            {
                "Condition": {"KeyPrefixEquals": "avatars/"},
                "Redirect": {
                    "Protocol": "https",
                    "HostName": "builder.decentraland.org",
                    "ReplaceKeyWith": "names/",
                },
            }
        ]

    def test_absolute_http_target_without_path(self):
        rules = create_routing_rules({"/old/*": "http://example.org"})
        assert rules == [
            RoutingRule(
                key_prefix_equals="old/",
                replace_key_with="",
                protocol="http",
                host_name="example.org",
            )
        ]

    def test_raw_wildcard_target_is_kept_literally(self):
        rules = create_routing_rules({"/path/*": "/other/*"})
        assert rules == [RoutingRule(key_prefix_equals="path/", replace_key_with="other/*")]


class TestReplaceKeyPrefixWith:
    def test_relative_target(self):
        assert s3(create_routing_rules({"/docs/*": "/documentation/$1"})) == [
            {
                "Condition": {"KeyPrefixEquals": "docs/"},
                "Redirect": {"ReplaceKeyPrefixWith": "documentation/"},
            }
        ]

    def test_relative_target_with_hostname_and_protocol(self):
        rules = create_routing_rules({"/docs/*": "/documentation/$1"}, **HOST_PROTOCOL)
        assert rules == [
            RoutingRule(
                key_prefix_equals="docs/",
                replace_key_prefix_with="documentation/",
                protocol="https",
                host_name="example.com",
            )
        ]

    def test_root_placeholder_strips_prefix(self):
        rules = create_routing_rules({"/legacy/*": "/$1"})
        assert rules == [RoutingRule(key_prefix_equals="legacy/", replace_key_prefix_with="")]

    def test_absolute_target(self):
        redirects = {"/builder/*": "https://builder.decentraland.org/$1"}
        assert s3(create_routing_rules(redirects)) == [
            {
                "Condition": {"KeyPrefixEquals": "builder/"},
                "Redirect": {
                    "Protocol": "https",
                    "HostName": "builder.decentraland.org",
                    "ReplaceKeyPrefixWith": "",
                },
            }
        ]


class TestMultipleRedirects:
    def test_keeps_input_order(self):
        rules = create_routing_rules(REDIRECTS)
        assert [rule.key_prefix_equals for rule in rules] == [
            "agora/",
            "docs/",
            "avatars/",
            "builder/",
        ]

    def test_options_only_apply_to_relative_targets(self):
        assert s3(create_routing_rules(REDIRECTS, **HOST_PROTOCOL)) == [
            {
                "Condition": {"KeyPrefixEquals": "agora/"},
                "Redirect": {"HostName": "example.com", "Protocol": "https", "ReplaceKeyWith": "dao/"},
            },
            {
                "Condition": {"KeyPrefixEquals": "docs/"},
                "Redirect": {
                    "HostName": "example.com",
                    "Protocol": "https",
                    "ReplaceKeyPrefixWith": "documentation/",
                },
            },
            {
                "Condition": {"KeyPrefixEquals": "avatars/"},
                "Redirect": {
                    "Protocol": "https",
                    "HostName": "builder.decentraland.org",
                    "ReplaceKeyWith": "names/",
                },
            },
            {
                "Condition": {"KeyPrefixEquals": "builder/"},
                "Redirect": {
                    "Protocol": "https",
                    "HostName": "builder.decentraland.org",
                    "ReplaceKeyPrefixWith": "",
                },
            },
        ]

    def test_same_input_same_output(self):
        assert create_routing_rules(REDIRECTS, **HOST) == create_routing_rules(REDIRECTS, **HOST)

    def test_does_not_mutate_input(self):
        redirects = dict(REDIRECTS)
        create_routing_rules(redirects, **HOST)
        assert redirects == REDIRECTS


class TestRoutingRuleDetails:
    def test_empty_rules(self):
        assert _routing.routing_rule_details([]) is None

    def test_serializes_s3_shape(self):
        rules = create_routing_rules({"/agora/*": "/dao/"})
        assert json.loads(_routing.routing_rule_details(rules)) == [
            {"Condition": {"KeyPrefixEquals": "agora/"}, "Redirect": {"ReplaceKeyWith": "dao/"}}
        ]
