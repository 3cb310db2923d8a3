"""
Single-page application hosting components.

Each concern is encapsulated in its own ComponentResource for clear
ownership, testability, and reuse. Use from the Pulumi entrypoint
(__main__.py) with config and output chaining:

- **OriginStorage**: private S3 origin + log bucket + origin access identity;
  exposes bucket_regional_domain_name and access_identity_path.
- **SiteCertificate**: DNS-validated ACM certificate; exposes certificate_arn
  once issued.
- **SiteDistribution**: CloudFront distribution with the SPA rewrite
  function; exposes domain_name for DNS.
- **DnsBindings**: Route53 A-record aliases for the subdomain and optional
  apex.
"""

from components.certificate import SiteCertificate
from components.distribution import SiteDistribution
from components.dns import DnsBindings
from components.storage import OriginStorage

__all__ = ["DnsBindings", "OriginStorage", "SiteCertificate", "SiteDistribution"]
