"""
Stack configuration loaded from pulumi.Config().

Provides a typed, immutable, validated view of stack settings. Settings are
read from Pulumi config (Pulumi.<stack>.yaml or ``pulumi config set``).
``domain_name`` and ``hosted_zone_id`` are required; everything else has a
default. Values are validated when the config is built, so a bad parameter
stops the program before any resource is registered.
"""

from dataclasses import dataclass
from typing import Any, Callable

import pulumi

from components._helpers import (
    default_bucket_name,
    default_function_name,
    parse_yes_no,
    site_hostname,
    validate_bucket_name,
    validate_domain_name,
    validate_function_name,
    validate_hosted_zone_id,
    validate_sub_domain,
)


class ConfigError(ValueError):
    """A stack setting is present but invalid."""


def _require_str(config: pulumi.Config, key: str) -> str:
    return config.require(key)


def _optional_str(default: str | None = None) -> Callable[[pulumi.Config, str], Any]:
    def parser(config: pulumi.Config, key: str) -> str | None:
        value = config.get(key)
        return default if value is None else value

    return parser


# (key, parser); parser receives (config, key) and returns the raw value.
# Derived defaults (None here) are filled in by StackConfig.from_pulumi_config.
_CONFIG_SPEC: list[tuple[str, Callable[[pulumi.Config, str], Any]]] = [
    ("sub_domain", _optional_str("www")),
    ("domain_name", _require_str),
    ("hosted_zone_id", _require_str),
    ("create_apex", _optional_str("no")),
    ("bucket_name", _optional_str()),
    ("log_bucket_name", _optional_str()),
    ("function_name", _optional_str()),
    ("distribution_comment", _optional_str()),
    ("price_class", _optional_str("PriceClass_100")),
    ("minimum_protocol_version", _optional_str("TLSv1.1_2016")),
    ("default_root_object", _optional_str("index.html")),
]

PRICE_CLASSES: tuple[str, ...] = ("PriceClass_100", "PriceClass_200", "PriceClass_All")


@dataclass(frozen=True)
class StackConfig:
    """
    Stack configuration from Pulumi config.

    Attributes:
        sub_domain: Label in front of the domain, e.g. "www" (no dots).
        domain_name: Base domain, e.g. "example.com" (required).
        hosted_zone_id: Route53 hosted zone for domain_name (required).
        create_apex: Whether the bare domain is aliased and certified too.
        bucket_name: Origin bucket name.
        log_bucket_name: Access log bucket name.
        function_name: CloudFront Function name.
        distribution_comment: CloudFront distribution comment.
        price_class: CloudFront price class.
        minimum_protocol_version: Minimum viewer TLS policy.
        default_root_object: Object served for "/".
    """

    sub_domain: str
    domain_name: str
    hosted_zone_id: str
    create_apex: bool
    bucket_name: str
    log_bucket_name: str
    function_name: str
    distribution_comment: str
    price_class: str = "PriceClass_100"
    minimum_protocol_version: str = "TLSv1.1_2016"
    default_root_object: str = "index.html"

    def __post_init__(self) -> None:
        if self.price_class not in PRICE_CLASSES:
            raise ConfigError(
                f"price_class must be one of {', '.join(PRICE_CLASSES)}: {self.price_class!r}"
            )

    @property
    def hostname(self) -> str:
        return site_hostname(self.sub_domain, self.domain_name)

    @classmethod
    def from_pulumi_config(cls, config: pulumi.Config) -> "StackConfig":
        """
        Build StackConfig from pulumi.Config().

        Raises:
            ConfigError: if a value fails validation.
            pulumi.ConfigMissingError: if a required key is not set.
        """
        raw = {key: parser(config, key) for key, parser in _CONFIG_SPEC}
        try:
            sub_domain = validate_sub_domain(raw["sub_domain"])
            domain_name = validate_domain_name(raw["domain_name"])
            hosted_zone_id = validate_hosted_zone_id(raw["hosted_zone_id"])
            create_apex = parse_yes_no(raw["create_apex"])
            bucket_name = validate_bucket_name(
                raw["bucket_name"] or default_bucket_name(sub_domain, domain_name)
            )
            log_bucket_name = validate_bucket_name(
                raw["log_bucket_name"] or f"{bucket_name}-logs"
            )
            function_name = validate_function_name(
                raw["function_name"] or default_function_name(bucket_name)
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e

        hostname = site_hostname(sub_domain, domain_name)
        return cls(
            sub_domain=sub_domain,
            domain_name=domain_name,
            hosted_zone_id=hosted_zone_id,
            create_apex=create_apex,
            bucket_name=bucket_name,
            log_bucket_name=log_bucket_name,
            function_name=function_name,
            distribution_comment=raw["distribution_comment"]
            or f"{hostname} web distribution",
            price_class=raw["price_class"],
            minimum_protocol_version=raw["minimum_protocol_version"],
            default_root_object=raw["default_root_object"],
        )
