"""
ACM certificate for the public hostname(s), validated through Route53.

CloudFront only accepts certificates from us-east-1, so the certificate and
its validation use a dedicated provider pinned to that region whatever the
stack's ``aws:region`` is. One CNAME validation record is published per
requested name into the hosted zone; ``CertificateValidation`` then waits
until ACM reports the certificate as issued. Consumers must take the ARN from
``certificate_arn`` (the validation's output), not from the certificate
itself, so they are ordered after issuance.
"""

import pulumi
import pulumi_aws as aws

from components._helpers import site_aliases, validation_option

ID: str = "spa:aws:SiteCertificate"

CERTIFICATE_REGION: str = "us-east-1"
VALIDATION_RECORD_TTL: int = 60


class SiteCertificate(pulumi.ComponentResource):
    """
    DNS-validated ACM certificate for ``<sub_domain>.<domain_name>``.

    The bare domain is added as a subject alternative name only when
    create_apex is True.
    """

    def __init__(
        self,
        name: str,
        sub_domain: str,
        domain_name: str,
        hosted_zone_id: str,
        create_apex: bool = False,
    ):
        """
        Request the certificate, publish validation records and wait for issuance.

        Args:
            name: Pulumi resource name prefix.
            sub_domain: Leading label of the primary name (e.g. "www").
            domain_name: Base domain (e.g. "example.com").
            hosted_zone_id: Route53 zone that is authoritative for domain_name.
            create_apex: Also cover the bare domain.

        Outputs (set on self, registered for the component):
            certificate_arn: ARN of the issued certificate.
        """
        super().__init__(ID, name)

        self.domains: list[str] = site_aliases(sub_domain, domain_name, create_apex)
        primary, alternates = self.domains[0], self.domains[1:]

        provider = aws.Provider(
            resource_name=f"{name}-{CERTIFICATE_REGION}",
            region=CERTIFICATE_REGION,
            opts=pulumi.ResourceOptions(parent=self),
        )
        regional_opts = pulumi.ResourceOptions(parent=self, provider=provider)

        self.certificate = aws.acm.Certificate(
            resource_name=name,
            domain_name=primary,
            subject_alternative_names=alternates or None,
            validation_method="DNS",
            opts=regional_opts,
        )

        # One validation record per requested name. Options are matched by
        # domain name since ACM does not keep them in request order.
        self.validation_records: list[aws.route53.Record] = []
        for index, domain in enumerate(self.domains):
            option = self.certificate.domain_validation_options.apply(
                lambda options, domain=domain: validation_option(options, domain)
            )
            record = aws.route53.Record(
                resource_name=f"{name}-validation-{index}",
                zone_id=hosted_zone_id,
                name=option.apply(lambda o: o.resource_record_name),
                type=option.apply(lambda o: o.resource_record_type),
                records=[option.apply(lambda o: o.resource_record_value)],
                ttl=VALIDATION_RECORD_TTL,
                allow_overwrite=True,
                opts=pulumi.ResourceOptions(parent=self),
            )
            self.validation_records.append(record)

        pulumi.log.info(
            f"requesting certificate for {', '.join(self.domains)}",
            resource=self,
        )

        # Blocks until ACM observes the records and issues the certificate.
        self.validation = aws.acm.CertificateValidation(
            resource_name=f"{name}-validation",
            certificate_arn=self.certificate.arn,
            validation_record_fqdns=[r.fqdn for r in self.validation_records],
            opts=regional_opts,
        )

        self.certificate_arn: pulumi.Output[str] = self.validation.certificate_arn
        self.register_outputs({"certificate_arn": self.certificate_arn})
