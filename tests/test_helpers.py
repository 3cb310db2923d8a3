"""Tests for pure helpers"""

from types import SimpleNamespace

import pytest

from components import _helpers


class TestSiteHostname:
    def test_joins_subdomain_and_domain(self):
        assert _helpers.site_hostname("www", "example.com") == "www.example.com"

    def test_drops_trailing_dot(self):
        assert _helpers.site_hostname("app", "example.com.") == "app.example.com"


class TestSiteAliases:
    def test_subdomain_only_without_apex(self):
        assert _helpers.site_aliases("www", "example.com", False) == ["www.example.com"]

    def test_apex_appended_when_enabled(self):
        assert _helpers.site_aliases("www", "example.com", True) == [
            "www.example.com",
            "example.com",
        ]


class TestValidateSubDomain:
    def test_accepts_single_label(self):
        assert _helpers.validate_sub_domain("www") == "www"

    def test_rejects_dot(self):
        with pytest.raises(ValueError, match="must not contain"):
            _helpers.validate_sub_domain("a.b")

    def test_rejects_empty(self):
        with pytest.raises(ValueError, match="empty"):
            _helpers.validate_sub_domain("")

    @pytest.mark.parametrize("value", ["my site", "-x", "x-", "a_b", "caf\u00e9", "a" * 64])
    def test_rejects_non_label(self, value):
        with pytest.raises(ValueError, match="DNS label"):
            _helpers.validate_sub_domain(value)

    def test_lowercases(self):
        assert _helpers.validate_sub_domain("WWW") == "www"

    def test_accepts_inner_hyphen(self):
        assert _helpers.validate_sub_domain("my-app") == "my-app"


class TestValidateDomainName:
    def test_normalizes_case_and_trailing_dot(self):
        assert _helpers.validate_domain_name("Example.COM.") == "example.com"

    def test_rejects_single_label(self):
        with pytest.raises(ValueError):
            _helpers.validate_domain_name("localhost")

    def test_rejects_empty_label(self):
        with pytest.raises(ValueError):
            _helpers.validate_domain_name("example..com")


class TestValidateHostedZoneId:
    def test_accepts_route53_id(self):
        assert _helpers.validate_hosted_zone_id("Z23ABC4XYZL05B") == "Z23ABC4XYZL05B"

    def test_rejects_lowercase(self):
        with pytest.raises(ValueError):
            _helpers.validate_hosted_zone_id("z23abc")

    def test_rejects_zone_path(self):
        with pytest.raises(ValueError):
            _helpers.validate_hosted_zone_id("/hostedzone/Z23ABC4XYZL05B")


class TestParseYesNo:
    @pytest.mark.parametrize("value,expected", [("yes", True), ("no", False)])
    def test_accepts_yes_and_no(self, value, expected):
        assert _helpers.parse_yes_no(value) is expected

    def test_passes_bool_through(self):
        assert _helpers.parse_yes_no(True) is True

    @pytest.mark.parametrize("value", ["true", "1", "", "maybe", "YES", " yes ", "No"])
    def test_rejects_anything_else(self, value):
        with pytest.raises(ValueError):
            _helpers.parse_yes_no(value)


class TestZoneCovers:
    def test_zone_equal_to_domain(self):
        assert _helpers.zone_covers("example.com.", "example.com")

    def test_parent_zone(self):
        assert _helpers.zone_covers("example.com", "shop.example.com")

    def test_unrelated_zone(self):
        assert not _helpers.zone_covers("example.org.", "example.com")

    def test_suffix_without_label_boundary(self):
        assert not _helpers.zone_covers("ample.com.", "example.com")


class TestDefaultBucketName:
    def test_replaces_dots_and_appends_web(self):
        assert _helpers.default_bucket_name("www", "example.com") == "www-example-com-web"

    def test_leaves_room_for_logs_suffix(self):
        name = _helpers.default_bucket_name("www", "a" * 80 + ".com")
        assert len(f"{name}-logs") <= 63
        assert name.endswith("-web")


class TestOriginReadPolicy:
    def test_single_statement_for_access_identity(self):
        policy = _helpers.origin_read_policy("site-web", "abc123")
        assert len(policy["Statement"]) == 1
        statement = policy["Statement"][0]
        assert statement["Effect"] == "Allow"
        assert statement["Principal"] == {"CanonicalUser": "abc123"}
        assert statement["Action"] == "s3:GetObject*"
        assert statement["Resource"] == "arn:aws:s3:::site-web/*"


class TestValidationOption:
    def test_matches_by_domain_not_position(self):
        options = [
            SimpleNamespace(domain_name="example.com", resource_record_name="_a.example.com."),
            SimpleNamespace(domain_name="www.example.com", resource_record_name="_b.www.example.com."),
        ]
        option = _helpers.validation_option(options, "www.example.com")
        assert option.resource_record_name == "_b.www.example.com."

    def test_missing_domain(self):
        with pytest.raises(LookupError):
            _helpers.validation_option([], "www.example.com")


class TestValidateBucketName:
    @pytest.mark.parametrize("value", ["www-example-com-web", "www.example.com", "abc"])
    def test_accepts_s3_names(self, value):
        assert _helpers.validate_bucket_name(value) == value

    @pytest.mark.parametrize(
        "value",
        ["ab", "My-Bucket", "-bucket", "bucket-", "a..b", "192.168.1.1", "a" * 64, "my_bucket"],
    )
    def test_rejects_invalid_names(self, value):
        with pytest.raises(ValueError, match="S3 bucket name"):
            _helpers.validate_bucket_name(value)


class TestDefaultFunctionName:
    def test_appends_suffix(self):
        assert (
            _helpers.default_function_name("www-example-com-web")
            == "www-example-com-web-redirect-to-index"
        )

    def test_replaces_dots(self):
        name = _helpers.default_function_name("www.example.com")
        assert name == "www-example-com-redirect-to-index"
        assert _helpers.validate_function_name(name) == name

    def test_truncates_to_64(self):
        name = _helpers.default_function_name("a" * 63)
        assert len(name) == 64
        assert _helpers.validate_function_name(name) == name


class TestValidateFunctionName:
    @pytest.mark.parametrize("value", ["bad name!", "a.b", "", "a" * 65])
    def test_rejects_invalid_names(self, value):
        with pytest.raises(ValueError, match="CloudFront Function name"):
            _helpers.validate_function_name(value)

    def test_accepts_underscores(self):
        assert _helpers.validate_function_name("site_redirect-1") == "site_redirect-1"
