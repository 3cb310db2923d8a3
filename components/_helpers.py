"""
Pure helpers for naming, DNS and policy documents. Testable without Pulumi runtime.

Used by the entrypoint and config (site_hostname, site_aliases, the
validate_* functions, parse_yes_no, zone_covers, default_bucket_name,
default_function_name), the storage component (origin_read_policy) and
the certificate component (validation_option). No Pulumi types; all
functions accept and return plain Python values so they can be unit-tested
without a Pulumi stack.
"""

import re
from typing import Any, Iterable

# Route53 hosted zone ids look like "Z23ABC4XYZL05B".
_HOSTED_ZONE_ID = re.compile(r"^Z[A-Z0-9]{1,32}$")

# Single DNS label, already lowercased.
_DNS_LABEL = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$")

# S3 bucket names: 3-63 chars, lowercase letters, digits, dots and hyphens.
_BUCKET_NAME_MAX_LEN = 63
_BUCKET_NAME = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")
_IPV4_LIKE = re.compile(r"^\d+\.\d+\.\d+\.\d+$")

# CloudFront Function names.
_FUNCTION_NAME_MAX_LEN = 64
_FUNCTION_NAME = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")


def strip_trailing_dot(domain: str) -> str:
    """Return domain without its trailing FQDN dot, if any."""
    return domain[:-1] if domain.endswith(".") else domain


def site_hostname(
    sub_domain: str,
    domain_name: str,
) -> str:
    """
    Build the public hostname, e.g. 'www.example.com'.

    Args:
        sub_domain: Leading label (e.g. "www").
        domain_name: Base domain (e.g. "example.com"); trailing dot is dropped.
    """
    return f"{sub_domain}.{strip_trailing_dot(domain_name)}"


def site_aliases(
    sub_domain: str,
    domain_name: str,
    create_apex: bool,
) -> list[str]:
    """
    Return the public hostnames served by the distribution.

    The subdomain host is always first. The apex (bare domain) is appended
    only when create_apex is True.
    """
    aliases = [site_hostname(sub_domain, domain_name)]
    if create_apex:
        aliases.append(strip_trailing_dot(domain_name))
    return aliases


def validate_sub_domain(
    value: str,
) -> str:
    """
    Return value, lowercased, if it is usable as a single DNS label in front of the domain.

    Raises:
        ValueError: if value is empty, contains a dot, or is not a DNS label
            (letters, digits and inner hyphens, at most 63 chars).
    """
    if not value:
        raise ValueError("sub_domain must not be empty")
    if "." in value:
        raise ValueError(f"sub_domain must not contain '.': {value!r}")
    label = value.lower()
    if not _DNS_LABEL.match(label):
        raise ValueError(f"sub_domain is not a valid DNS label: {value!r}")
    return label


def validate_domain_name(
    value: str,
) -> str:
    """
    Return value normalised (lowercase, no trailing dot) if it has two labels or more.

    Raises:
        ValueError: if value has fewer than two non-empty labels.
    """
    domain = strip_trailing_dot(value.strip()).lower()
    labels = domain.split(".")
    if len(labels) < 2 or not all(labels):
        raise ValueError(f"domain_name is not a valid domain: {value!r}")
    return domain


def validate_hosted_zone_id(
    value: str,
) -> str:
    """
    Return value if it has the shape of a Route53 hosted zone id.

    Raises:
        ValueError: if value does not look like 'Z' followed by upper-case
            letters and digits.
    """
    if not _HOSTED_ZONE_ID.match(value):
        raise ValueError(f"hosted_zone_id is not a Route53 zone id: {value!r}")
    return value


def parse_yes_no(
    value: str | bool,
) -> bool:
    """
    Parse the yes/no switch used for the apex alias.

    Only the exact strings 'yes' and 'no' are accepted; a bool passes through
    so typed config values work as well.

    Raises:
        ValueError: for any other value.
    """
    if isinstance(value, bool):
        return value
    if value == "yes":
        return True
    if value == "no":
        return False
    raise ValueError(f"expected 'yes' or 'no', got {value!r}")


def zone_covers(
    zone_name: str,
    domain_name: str,
) -> bool:
    """
    Return True if the hosted zone is authoritative for domain_name.

    The zone must be the domain itself or one of its parents
    ('example.com.' covers 'example.com' and 'shop.example.com').
    """
    zone = strip_trailing_dot(zone_name).lower()
    domain = strip_trailing_dot(domain_name).lower()
    return domain == zone or domain.endswith(f".{zone}")


def default_bucket_name(
    sub_domain: str,
    domain_name: str,
) -> str:
    """
    Derive an S3-compliant origin bucket name from the public hostname.

    Dots become hyphens and the result ends with "-web". Names are truncated
    so that the "-logs" suffix of the log bucket still fits in 63 chars.
    """
    # Reserve 5 chars for the "-logs" suffix of the log bucket.
    base = site_hostname(sub_domain, domain_name).lower().replace(".", "-")
    base = re.sub(r"[^a-z0-9-]", "", base)
    suffix = "-web"
    cleaned = base[: _BUCKET_NAME_MAX_LEN - len("-logs") - len(suffix)].strip("-")
    return f"{cleaned}{suffix}"


def validate_bucket_name(
    value: str,
) -> str:
    """
    Return value if it is a valid S3 bucket name.

    Raises:
        ValueError: if value is not 3-63 lowercase letters, digits, dots and
            hyphens starting and ending with a letter or digit, contains
            '..', or looks like an IPv4 address.
    """
    if not _BUCKET_NAME.match(value) or ".." in value or _IPV4_LIKE.match(value):
        raise ValueError(f"not a valid S3 bucket name: {value!r}")
    return value


def default_function_name(
    bucket_name: str,
) -> str:
    """
    Derive the CloudFront Function name from the origin bucket name.

    Characters CloudFront does not allow (dots included) become hyphens and
    the result is cut to 64 chars.
    """
    name = re.sub(r"[^a-zA-Z0-9_-]", "-", f"{bucket_name}-redirect-to-index")
    return name[:_FUNCTION_NAME_MAX_LEN]


def validate_function_name(
    value: str,
) -> str:
    """
    Return value if it is a valid CloudFront Function name.

    Raises:
        ValueError: if value is not 1-64 letters, digits, hyphens or underscores.
    """
    if not _FUNCTION_NAME.match(value):
        raise ValueError(f"not a valid CloudFront Function name: {value!r}")
    return value


def origin_read_policy(
    bucket_name: str,
    canonical_user_id: str,
) -> dict[str, Any]:
    """
    Build the origin bucket policy document.

    Exactly one statement: the CloudFront origin access identity (by its S3
    canonical user id) may read every object in the bucket. Nothing else is
    allowed, so with public access blocked every other principal is denied.

    Args:
        bucket_name: Origin bucket name.
        canonical_user_id: S3 canonical user id of the origin access identity.

    Returns:
        IAM policy document as a dict (json.dumps it for the API).
    """
    return {
        "Id": "OriginAccessPolicy",
        "Version": "2012-10-17",
        "Statement": [
            {
                "Sid": "PolicyForCloudFrontPrivateContent",
                "Effect": "Allow",
                "Principal": {"CanonicalUser": canonical_user_id},
                "Action": "s3:GetObject*",
                "Resource": f"arn:aws:s3:::{bucket_name}/*",
            }
        ],
    }


def validation_option(
    options: Iterable[Any],
    domain: str,
) -> Any:
    """
    Pick the ACM domain validation option for one requested name.

    ACM does not guarantee the order of domain_validation_options, so records
    are matched by domain name rather than by index.

    Raises:
        LookupError: if the certificate has no option for domain.
    """
    for option in options:
        if option.domain_name == domain:
            return option
    raise LookupError(f"no DNS validation option for {domain!r}")
