"""
AWS origin storage: private S3 origin bucket, access log bucket, origin
access identity and the bucket policy that ties them together.

The origin bucket holds the built application. It is never publicly
readable: Block Public Access is always on, and the only grant in its bucket
policy is read access for a CloudFront origin access identity. Both buckets
are versioned and encrypted at rest with SSE-S3 (AES256).

The log bucket receives S3 server access logs (prefix ``s3-access-logs``)
and, through the distribution, CloudFront standard logs. Log delivery needs
ACLs, so the log bucket keeps ``BucketOwnerPreferred`` ownership and the
``log-delivery-write`` canned ACL. It is force-destroyed on teardown.
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from components._helpers import origin_read_policy

ID: str = "spa:aws:OriginStorage"

S3_ACCESS_LOG_PREFIX: str = "s3-access-logs"

# Applied to both buckets. Used by tests and callers to assert on secure defaults.
S3_BLOCK_PUBLIC_ACCESS: dict[str, bool] = {
    "block_public_acls": True,
    "block_public_policy": True,
    "ignore_public_acls": True,
    "restrict_public_buckets": True,
}

SSE_ALGORITHM: str = "AES256"


@dataclass(frozen=True)
class BucketControls:
    """Per-bucket resources enforcing the private, versioned, encrypted defaults."""

    public_access_block: aws.s3.BucketPublicAccessBlock
    versioning: aws.s3.BucketVersioning
    encryption: aws.s3.BucketServerSideEncryptionConfiguration


class OriginStorage(pulumi.ComponentResource):
    """
    Private, versioned, encrypted origin bucket readable only by CloudFront.

    Resources: origin Bucket and log Bucket (each with BucketPublicAccessBlock,
    BucketVersioning and BucketServerSideEncryptionConfiguration),
    BucketOwnershipControls and BucketAcl on the log bucket, BucketLogging on
    the origin, OriginAccessIdentity and BucketPolicy.
    """

    def __init__(
        self,
        name: str,
        bucket_name: str,
        log_bucket_name: str,
    ):
        """
        Create both buckets, the origin access identity and the bucket policy.

        Args:
            name: Pulumi resource name prefix for all child resources.
            bucket_name: Physical name of the origin bucket.
            log_bucket_name: Physical name of the access log bucket.

        Outputs (set on self, registered for the component):
            bucket_name: Origin bucket name (stack output).
            bucket_regional_domain_name: Origin domain for the distribution.
            log_bucket_domain_name: Log bucket domain for CloudFront logging.
            access_identity_path: Origin access identity path for the
                distribution's S3 origin config.
        """
        super().__init__(ID, name)

        child_opts = pulumi.ResourceOptions(parent=self)

        # Create the log bucket first: the origin bucket logs into it.
        # force_destroy empties it on teardown so destroy does not fail on logs.
        self.log_bucket = aws.s3.Bucket(
            resource_name=f"{name}-logs",
            bucket=log_bucket_name,
            force_destroy=True,
            opts=child_opts,
        )
        self.log_bucket_controls = self._secure_bucket(f"{name}-logs", self.log_bucket)

        # Log delivery (S3 server access logs and CloudFront standard logs)
        # writes through ACLs, which BucketOwnerEnforced would disable.
        log_ownership = aws.s3.BucketOwnershipControls(
            resource_name=f"{name}-logs-ownership",
            bucket=self.log_bucket.id,
            rule=aws.s3.BucketOwnershipControlsRuleArgs(
                object_ownership="BucketOwnerPreferred",
            ),
            opts=child_opts,
        )
        aws.s3.BucketAcl(
            resource_name=f"{name}-logs-acl",
            bucket=self.log_bucket.id,
            acl="log-delivery-write",
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[
                    log_ownership,
                    self.log_bucket_controls.public_access_block,
                ],
            ),
        )

        # Create the origin bucket.
        # This is where the application build is deployed.
        self.bucket = aws.s3.Bucket(
            resource_name=name,
            bucket=bucket_name,
            opts=child_opts,
        )
        self.bucket_controls = self._secure_bucket(name, self.bucket)

        aws.s3.BucketLogging(
            resource_name=f"{name}-logging",
            bucket=self.bucket.id,
            target_bucket=self.log_bucket.id,
            target_prefix=S3_ACCESS_LOG_PREFIX,
            opts=child_opts,
        )

        # The identity CloudFront uses to read the origin. It has no
        # permissions of its own; the bucket policy below is its only grant.
        self.access_identity = aws.cloudfront.OriginAccessIdentity(
            resource_name=f"{name}-oai",
            comment=f"access-identity-{bucket_name}",
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.bucket]),
        )

        # Exactly one allow statement: the identity may read objects.
        # Registered after the public access block so a policy is never
        # attached to a bucket that could still be made public.
        policy = pulumi.Output.all(
            bucket=self.bucket.bucket,
            canonical_user_id=self.access_identity.s3_canonical_user_id,
        ).apply(
            lambda args: json.dumps(
                origin_read_policy(args["bucket"], args["canonical_user_id"])
            )
        )
        self.bucket_policy = aws.s3.BucketPolicy(
            resource_name=f"{name}-policy",
            bucket=self.bucket.id,
            policy=policy,
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[self.bucket_controls.public_access_block],
            ),
        )

        self.bucket_name: pulumi.Output[str] = self.bucket.bucket
        self.bucket_regional_domain_name: pulumi.Output[str] = (
            self.bucket.bucket_regional_domain_name
        )
        self.log_bucket_domain_name: pulumi.Output[str] = (
            self.log_bucket.bucket_domain_name
        )
        self.access_identity_path: pulumi.Output[str] = (
            self.access_identity.cloudfront_access_identity_path
        )
        self.register_outputs(
            {
                "bucket_name": self.bucket_name,
                "bucket_regional_domain_name": self.bucket_regional_domain_name,
                "log_bucket_domain_name": self.log_bucket_domain_name,
                "access_identity_path": self.access_identity_path,
            }
        )

    def _secure_bucket(
        self,
        name: str,
        bucket: aws.s3.Bucket,
    ) -> BucketControls:
        """Block public access, enable versioning and SSE-S3 on bucket."""
        child_opts = pulumi.ResourceOptions(parent=self)

        public_block = aws.s3.BucketPublicAccessBlock(
            resource_name=f"{name}-block-public",
            bucket=bucket.id,
            opts=child_opts,
            **S3_BLOCK_PUBLIC_ACCESS,
        )
        versioning = aws.s3.BucketVersioning(
            resource_name=f"{name}-versioning",
            bucket=bucket.id,
            versioning_configuration=aws.s3.BucketVersioningVersioningConfigurationArgs(
                status="Enabled",
            ),
            opts=child_opts,
        )
        encryption_default = (
            aws.s3.BucketServerSideEncryptionConfigurationRuleApplyServerSideEncryptionByDefaultArgs(
                sse_algorithm=SSE_ALGORITHM,
            )
        )
        encryption = aws.s3.BucketServerSideEncryptionConfiguration(
            resource_name=f"{name}-encryption",
            bucket=bucket.id,
            rules=[
                aws.s3.BucketServerSideEncryptionConfigurationRuleArgs(
                    apply_server_side_encryption_by_default=encryption_default,
                )
            ],
            opts=child_opts,
        )
        return BucketControls(
            public_access_block=public_block,
            versioning=versioning,
            encryption=encryption,
        )
