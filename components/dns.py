"""
Route53 alias records binding the public hostnames to the distribution.

``<sub_domain>.<domain_name>`` always gets an A alias. The bare domain gets
one only when the apex switch is on; this is decided once at deploy time.
Alias targets use CloudFront's fixed hosted zone id rather than the
distribution's output so the records can be planned before it exists.
"""

import pulumi
import pulumi_aws as aws

from components._helpers import site_hostname, strip_trailing_dot

ID: str = "spa:aws:DnsBindings"

# Hosted zone id of every CloudFront distribution, for alias targets.
CLOUDFRONT_ALIAS_ZONE_ID: str = "Z2FDTNDATAQYW2"


class DnsBindings(pulumi.ComponentResource):
    """
    A-record aliases for the subdomain and, optionally, the apex.

    Subdomain record: ``<sub_domain>.<domain_name>`` → target_domain_name.
    Apex record (if create_apex): ``<domain_name>`` → target_domain_name.
    """

    def __init__(
        self,
        name: str,
        hosted_zone_id: str,
        sub_domain: str,
        domain_name: str,
        target_domain_name: pulumi.Input[str],
        create_apex: bool = False,
    ):
        """
        Create the alias record(s).

        Args:
            name: Pulumi resource name prefix.
            hosted_zone_id: Route53 zone that is authoritative for domain_name.
            sub_domain: Leading label of the site hostname.
            domain_name: Base domain.
            target_domain_name: Distribution domain (e.g. d111.cloudfront.net).
            create_apex: Also alias the bare domain.

        Outputs (set on self, registered for the component):
            fqdns: Record names that were bound.
        """
        super().__init__(ID, name)

        self.site_record = self._alias_record(
            f"{name}-site",
            hosted_zone_id,
            site_hostname(sub_domain, domain_name),
            target_domain_name,
        )

        self.apex_record: aws.route53.Record | None = None
        if create_apex:
            self.apex_record = self._alias_record(
                f"{name}-apex",
                hosted_zone_id,
                strip_trailing_dot(domain_name),
                target_domain_name,
            )
        else:
            pulumi.log.debug("apex alias disabled, skipping apex record", resource=self)

        records = [r for r in (self.site_record, self.apex_record) if r is not None]
        self.fqdns: pulumi.Output[list[str]] = pulumi.Output.all(
            *[r.fqdn for r in records]
        )
        self.register_outputs({"fqdns": self.fqdns})

    def _alias_record(
        self,
        resource_name: str,
        hosted_zone_id: str,
        record_name: str,
        target_domain_name: pulumi.Input[str],
    ) -> aws.route53.Record:
        return aws.route53.Record(
            resource_name=resource_name,
            zone_id=hosted_zone_id,
            name=record_name,
            type="A",
            aliases=[
                aws.route53.RecordAliasArgs(
                    name=target_domain_name,
                    zone_id=CLOUDFRONT_ALIAS_ZONE_ID,
                    evaluate_target_health=False,
                )
            ],
            opts=pulumi.ResourceOptions(parent=self),
        )
