"""Service-level endpoints: version, health probes, telemetry and locks."""

from .base import ApiBase, Endpoint


class ServiceApi(ApiBase):
    root = Endpoint("GET", "/", doc="Version information of the running instance")
    telemetry = Endpoint("GET", "/telemetry", query=("anonymize",))
    metrics = Endpoint("GET", "/metrics", query=("anonymize",))
    get_locks = Endpoint("GET", "/locks")
    post_locks = Endpoint("POST", "/locks")
    healthz = Endpoint("GET", "/healthz")
    livez = Endpoint("GET", "/livez")
    readyz = Endpoint("GET", "/readyz")
    get_issues = Endpoint("GET", "/issues")
    clear_issues = Endpoint("DELETE", "/issues")
