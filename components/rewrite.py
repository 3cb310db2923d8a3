"""
Viewer-request URI rewrite for single-page application routing.

Client-side routes such as ``/dashboard/settings`` have no object in the
bucket; the edge rewrites them to the index so the application router can
take over. Requests whose last path segment carries a file extension
(``/assets/app.js``) are served as-is.

The rule runs at the edge as a CloudFront Function (``cloudfront-js-1.0``),
whose source is produced by ``redirect_function_code``. ``rewrite_request``
is the same rule in Python, kept pure so it can be tested without AWS.

Known limitation: any dot in the last segment counts as an extension, so
``/release-1.2`` is served as a file rather than the index. Paths with a
dotted directory and an extensionless last segment (``/v1.2/page``) are
rewritten, since only the last segment is inspected.
"""

from typing import Any, Mapping

INDEX_URI: str = "/"

_FUNCTION_TEMPLATE = """function handler(event) {
    var request = event.request;
    var uri = request.uri;

    // Last path segment has a file extension: serve as is.
    if (uri.split('/').reverse()[0].split('.').length >= 2) {
        return request;
    }

    // Anything else is a client-side route: serve the index document.
    request.uri = '%(index_uri)s';
    return request;
}
"""


def has_file_extension(uri: str) -> bool:
    """
    Return True if the last path segment of uri contains at least one dot.

    A trailing slash yields an empty last segment, which has no extension.
    """
    last_segment = uri.split("/")[-1]
    return len(last_segment.split(".")) >= 2


def rewrite_request(
    request: Mapping[str, Any],
    index_uri: str = INDEX_URI,
) -> dict[str, Any]:
    """
    Apply the single-page application rewrite to a viewer request.

    Args:
        request: Viewer request with at least a ``uri`` key.
        index_uri: URI of the application entry point.

    Returns:
        A new request dict: unchanged when the URI names a file, otherwise
        with ``uri`` set to index_uri. The input is never mutated.
    """
    rewritten = dict(request)
    if not has_file_extension(rewritten["uri"]):
        rewritten["uri"] = index_uri
    return rewritten


def redirect_function_code(index_uri: str = INDEX_URI) -> str:
    """Return the CloudFront Function source implementing rewrite_request."""
    if "'" in index_uri or "\\" in index_uri:
        raise ValueError(f"index_uri cannot be embedded in a JS string: {index_uri!r}")
    return _FUNCTION_TEMPLATE % {"index_uri": index_uri}
