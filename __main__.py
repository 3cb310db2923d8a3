"""
Single-page application hosting on AWS - Pulumi entrypoint.

Wires four ComponentResources using Pulumi config and output chaining:

- **OriginStorage**: private origin bucket, log bucket, origin access
  identity and bucket policy.
- **SiteCertificate**: ACM certificate (us-east-1) validated through the
  hosted zone; its ARN is only available once issued.
- **SiteDistribution**: CloudFront distribution with the viewer-request
  rewrite function, fed by the storage outputs and the certificate ARN.
- **DnsBindings**: A-record aliases for the subdomain and, optionally, the
  apex, pointing at the distribution domain.

Deploy order follows the outputs: certificate issued, distribution deployed,
DNS bound. Stack exports: cloudfront_domain_name, bucket_name, site_url,
aliases.
"""

import pulumi
import pulumi_aws as aws

from components import DnsBindings, OriginStorage, SiteCertificate, SiteDistribution
from components._helpers import site_aliases, zone_covers
from config import ConfigError, StackConfig


def _check_hosted_zone(config: StackConfig) -> None:
    """Fail the deploy if the hosted zone is unknown or not authoritative for the domain."""
    zone = aws.route53.get_zone(zone_id=config.hosted_zone_id)
    if not zone_covers(zone.name, config.domain_name):
        raise pulumi.RunError(
            f"hosted zone {config.hosted_zone_id} ({zone.name}) does not cover "
            f"{config.domain_name}"
        )
    pulumi.log.info(f"using hosted zone {zone.name} ({config.hosted_zone_id})")


def main():
    """
    Build the storage, certificate, distribution and DNS components.

    Reads and validates config, checks the hosted zone, then instantiates
    each component, chaining storage and certificate outputs into the
    distribution and the distribution domain into DNS. Returns the
    components by role.

    Raises:
        pulumi.RunError: on invalid config or a hosted zone that does not
            cover the domain, before any resource is registered.
    """
    try:
        config = StackConfig.from_pulumi_config(pulumi.Config())
    except ConfigError as e:
        raise pulumi.RunError(f"invalid stack configuration: {e}") from e

    _check_hosted_zone(config)

    aliases = site_aliases(config.sub_domain, config.domain_name, config.create_apex)
    pulumi.log.info(
        f"serving {', '.join(aliases)} "
        f"(apex alias {'enabled' if config.create_apex else 'disabled'})"
    )

    storage = OriginStorage(
        name="origin",
        bucket_name=config.bucket_name,
        log_bucket_name=config.log_bucket_name,
    )

    certificate = SiteCertificate(
        name="site-certificate",
        sub_domain=config.sub_domain,
        domain_name=config.domain_name,
        hosted_zone_id=config.hosted_zone_id,
        create_apex=config.create_apex,
    )

    distribution = SiteDistribution(
        name="site",
        function_name=config.function_name,
        origin_domain_name=storage.bucket_regional_domain_name,
        access_identity_path=storage.access_identity_path,
        certificate_arn=certificate.certificate_arn,
        aliases=aliases,
        log_bucket_domain_name=storage.log_bucket_domain_name,
        depends_on=[storage.access_identity, certificate.validation],
        comment=config.distribution_comment,
        price_class=config.price_class,
        minimum_protocol_version=config.minimum_protocol_version,
        default_root_object=config.default_root_object,
    )

    dns = DnsBindings(
        name="site-dns",
        hosted_zone_id=config.hosted_zone_id,
        sub_domain=config.sub_domain,
        domain_name=config.domain_name,
        target_domain_name=distribution.domain_name,
        create_apex=config.create_apex,
    )

    for output_name, value in [
        ("cloudfront_domain_name", distribution.domain_name),
        ("bucket_name", storage.bucket_name),
        ("site_url", f"https://{config.hostname}/"),
        ("aliases", aliases),
    ]:
        pulumi.export(output_name, value)

    return {
        "storage": storage,
        "certificate": certificate,
        "distribution": distribution,
        "dns": dns,
    }


if __name__ == "__main__":
    main()
