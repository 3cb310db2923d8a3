"""
CloudFront distribution serving the single-page application.

One S3 origin, reached through the origin access identity, and one default
cache behaviour: HTTPS only (HTTP redirects), GET/HEAD/OPTIONS, compression,
the managed CachingOptimized cache policy and CORS-S3Origin origin request
policy. A CloudFront Function on viewer-request rewrites extensionless URIs
to the index before the cache key is computed, so every client-side route
shares one cached index response.

The distribution is not created until the origin access identity, the
issued certificate and the function exist. Creation waits for propagation
to the edge locations, so anything consuming ``domain_name`` (DNS aliases)
is bound only once the distribution is deployed.
"""

import pulumi
import pulumi_aws as aws

from components.rewrite import INDEX_URI, redirect_function_code

ID: str = "spa:aws:SiteDistribution"

ORIGIN_ID: str = "s3-origin"
CLOUDFRONT_LOG_PREFIX: str = "cloudfront-access-logs"

# AWS managed policies: Managed-CachingOptimized and Managed-CORS-S3Origin.
CACHING_OPTIMIZED_POLICY_ID: str = "658327ea-f89d-4fab-a63d-7e88639e58f6"
CORS_S3_ORIGIN_REQUEST_POLICY_ID: str = "88a5eaf4-2fd4-4709-b370-b4c650ea3fcf"

ALLOWED_METHODS: list[str] = ["GET", "HEAD", "OPTIONS"]
CACHED_METHODS: list[str] = ["GET", "HEAD"]


class SiteDistribution(pulumi.ComponentResource):
    """
    CloudFront Function + Distribution in front of the private origin bucket.

    Resources: Function (viewer-request URI rewrite), Distribution.
    """

    def __init__(
        self,
        name: str,
        function_name: str,
        origin_domain_name: pulumi.Input[str],
        access_identity_path: pulumi.Input[str],
        certificate_arn: pulumi.Input[str],
        aliases: list[str],
        log_bucket_domain_name: pulumi.Input[str],
        depends_on: list[pulumi.Resource] | None = None,
        comment: str = "",
        price_class: str = "PriceClass_100",
        minimum_protocol_version: str = "TLSv1.1_2016",
        default_root_object: str = "index.html",
    ):
        """
        Create the rewrite function and the distribution.

        Args:
            name: Pulumi resource name prefix.
            function_name: Physical name of the CloudFront Function.
            origin_domain_name: Regional domain name of the origin bucket.
            access_identity_path: Origin access identity path for S3 access.
            certificate_arn: ARN of the issued ACM certificate (us-east-1).
            aliases: Public hostnames (one or two).
            log_bucket_domain_name: Domain of the bucket receiving standard logs.
            depends_on: Resources that must be ready first (origin access
                identity, certificate validation).
            comment: Distribution comment.
            price_class: CloudFront price class.
            minimum_protocol_version: Minimum viewer TLS policy.
            default_root_object: Object served for "/".

        Outputs (set on self, registered for the component):
            domain_name: Distribution domain (alias target for DNS).
            hosted_zone_id: CloudFront alias hosted zone id.
            url: HTTPS URL of the distribution domain.
        """
        super().__init__(ID, name)

        self.function = aws.cloudfront.Function(
            resource_name=f"{name}-redirect",
            name=function_name,
            runtime="cloudfront-js-1.0",
            comment="Rewrite requests without a file extension to the index document",
            code=redirect_function_code(INDEX_URI),
            publish=True,
            opts=pulumi.ResourceOptions(parent=self),
        )

        origins = [
            aws.cloudfront.DistributionOriginArgs(
                domain_name=origin_domain_name,
                origin_id=ORIGIN_ID,
                s3_origin_config=aws.cloudfront.DistributionOriginS3OriginConfigArgs(
                    origin_access_identity=access_identity_path,
                ),
            )
        ]

        # Rewrite runs at viewer-request, i.e. before the cache lookup.
        default_cache_behavior = aws.cloudfront.DistributionDefaultCacheBehaviorArgs(
            target_origin_id=ORIGIN_ID,
            viewer_protocol_policy="redirect-to-https",
            allowed_methods=ALLOWED_METHODS,
            cached_methods=CACHED_METHODS,
            compress=True,
            cache_policy_id=CACHING_OPTIMIZED_POLICY_ID,
            origin_request_policy_id=CORS_S3_ORIGIN_REQUEST_POLICY_ID,
            function_associations=[
                aws.cloudfront.DistributionDefaultCacheBehaviorFunctionAssociationArgs(
                    event_type="viewer-request",
                    function_arn=self.function.arn,
                )
            ],
        )

        restrictions = aws.cloudfront.DistributionRestrictionsArgs(
            geo_restriction=aws.cloudfront.DistributionRestrictionsGeoRestrictionArgs(
                restriction_type="none",
            ),
        )

        viewer_certificate = aws.cloudfront.DistributionViewerCertificateArgs(
            acm_certificate_arn=certificate_arn,
            minimum_protocol_version=minimum_protocol_version,
            ssl_support_method="sni-only",
        )

        logging_config = aws.cloudfront.DistributionLoggingConfigArgs(
            bucket=log_bucket_domain_name,
            include_cookies=False,
            prefix=CLOUDFRONT_LOG_PREFIX,
        )

        # The distribution is registered only once these are ready.
        self.dependencies: list[pulumi.Resource] = [self.function, *(depends_on or [])]
        distribution_opts = pulumi.ResourceOptions(
            parent=self,
            depends_on=self.dependencies,
        )
        self.distribution = aws.cloudfront.Distribution(
            resource_name=f"{name}-cdn",
            enabled=True,
            comment=comment,
            aliases=aliases,
            default_root_object=default_root_object,
            origins=origins,
            default_cache_behavior=default_cache_behavior,
            price_class=price_class,
            restrictions=restrictions,
            viewer_certificate=viewer_certificate,
            logging_config=logging_config,
            wait_for_deployment=True,
            opts=distribution_opts,
        )

        self.domain_name: pulumi.Output[str] = self.distribution.domain_name
        self.hosted_zone_id: pulumi.Output[str] = self.distribution.hosted_zone_id
        self.url: pulumi.Output[str] = pulumi.Output.concat(
            "https://", self.distribution.domain_name
        )
        self.register_outputs(
            {
                "domain_name": self.domain_name,
                "hosted_zone_id": self.hosted_zone_id,
                "url": self.url,
            }
        )
