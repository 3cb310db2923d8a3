"""Tests for StackConfig parsing and validation"""

import pytest

from config import ConfigError, StackConfig


class FakeConfig:
    """Stands in for pulumi.Config: get/require over a dict."""

    def __init__(self, **values):
        self.values = values

    def get(self, key):
        return self.values.get(key)

    def require(self, key):
        if key not in self.values:
            raise LookupError(key)
        return self.values[key]


def _config(**overrides):
    values = {"domain_name": "example.com", "hosted_zone_id": "Z23ABC4XYZL05B"}
    values.update(overrides)
    return FakeConfig(**values)


class TestFromPulumiConfig:
    def test_defaults(self):
        config = StackConfig.from_pulumi_config(_config())
        assert config.sub_domain == "www"
        assert config.create_apex is False
        assert config.hostname == "www.example.com"
        assert config.bucket_name == "www-example-com-web"
        assert config.log_bucket_name == "www-example-com-web-logs"
        assert config.function_name == "www-example-com-web-redirect-to-index"
        assert config.distribution_comment == "www.example.com web distribution"
        assert config.price_class == "PriceClass_100"
        assert config.minimum_protocol_version == "TLSv1.1_2016"
        assert config.default_root_object == "index.html"

    def test_overrides(self):
        config = StackConfig.from_pulumi_config(
            _config(sub_domain="app", create_apex="yes", bucket_name="my-site")
        )
        assert config.create_apex is True
        assert config.bucket_name == "my-site"
        assert config.log_bucket_name == "my-site-logs"

    def test_missing_required_key(self):
        with pytest.raises(LookupError):
            StackConfig.from_pulumi_config(FakeConfig(domain_name="example.com"))

    def test_sub_domain_with_dot_rejected(self):
        with pytest.raises(ConfigError, match="sub_domain"):
            StackConfig.from_pulumi_config(_config(sub_domain="www.eu"))

    def test_create_apex_must_be_yes_or_no(self):
        with pytest.raises(ConfigError):
            StackConfig.from_pulumi_config(_config(create_apex="true"))

    def test_malformed_hosted_zone_rejected(self):
        with pytest.raises(ConfigError, match="hosted_zone_id"):
            StackConfig.from_pulumi_config(_config(hosted_zone_id="example.com"))

    def test_unknown_price_class_rejected(self):
        with pytest.raises(ConfigError, match="price_class"):
            StackConfig.from_pulumi_config(_config(price_class="PriceClass_1"))

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)

    def test_sub_domain_must_be_dns_label(self):
        with pytest.raises(ConfigError, match="DNS label"):
            StackConfig.from_pulumi_config(_config(sub_domain="my site"))

    def test_sub_domain_lowercased(self):
        config = StackConfig.from_pulumi_config(_config(sub_domain="WWW"))
        assert config.sub_domain == "www"
        assert config.hostname == "www.example.com"

    def test_create_apex_is_case_sensitive(self):
        with pytest.raises(ConfigError):
            StackConfig.from_pulumi_config(_config(create_apex="YES"))

    def test_dotted_bucket_name_gives_valid_function_name(self):
        config = StackConfig.from_pulumi_config(_config(bucket_name="www.example.com"))
        assert config.bucket_name == "www.example.com"
        assert config.function_name == "www-example-com-redirect-to-index"

    def test_invalid_bucket_name_rejected(self):
        with pytest.raises(ConfigError, match="S3 bucket name"):
            StackConfig.from_pulumi_config(_config(bucket_name="My_Bucket"))

    def test_invalid_log_bucket_name_rejected(self):
        with pytest.raises(ConfigError, match="S3 bucket name"):
            StackConfig.from_pulumi_config(_config(log_bucket_name="logs..bucket"))

    def test_derived_log_bucket_name_too_long(self):
        with pytest.raises(ConfigError, match="S3 bucket name"):
            StackConfig.from_pulumi_config(_config(bucket_name="a" * 63))

    def test_invalid_function_name_rejected(self):
        with pytest.raises(ConfigError, match="CloudFront Function name"):
            StackConfig.from_pulumi_config(_config(function_name="bad name!"))

    def test_function_name_override_kept(self):
        config = StackConfig.from_pulumi_config(_config(function_name="site_rewrite"))
        assert config.function_name == "site_rewrite"
